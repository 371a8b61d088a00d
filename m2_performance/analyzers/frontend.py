"""Static asset minification and bundling settings."""

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


MINIFY_SETTINGS = (
    ("dev/template/minify_html", "Enable HTML minification", "HTML"),
    ("dev/js/minify_files", "Enable JavaScript minification", "JavaScript"),
    ("dev/css/minify_files", "Enable CSS minification", "CSS"),
)


class FrontendAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "frontend"
    
    def analyze(self) -> None:
        # Minified and bundled assets get in the way while developing
        if self.is_in_developer_mode():
            self.recommend(
                "Frontend optimizations skipped in developer mode",
                Priority.LOW,
                "Minification and bundling checks apply to production deployments only."
            )
            return
        
        for path, title, label in MINIFY_SETTINGS:
            if str(self.config_value(path, "0")) != "1":
                self.recommend(
                    title,
                    Priority.MEDIUM,
                    f"{label} minification is disabled.",
                    f"Set with: bin/magento config:set {path} 1"
                )
        
        if str(self.config_value("dev/js/merge_files", "0")) == "1":
            self.recommend(
                "Disable JavaScript merging",
                Priority.MEDIUM,
                "Merging produces very large files that defeat HTTP/2 multiplexing and browser caching.",
                "Set with: bin/magento config:set dev/js/merge_files 0"
            )
        
        if str(self.config_value("dev/js/enable_js_bundling", "0")) == "1":
            self.recommend(
                "Replace built-in JavaScript bundling",
                Priority.LOW,
                "The native bundler ships most of the storefront JavaScript on every page. "
                "Consider an advanced bundling tool or a Hyva based theme."
            )
        
        if str(self.config_value("dev/css/use_css_critical_path", "0")) != "1":
            self.recommend(
                "Enable critical CSS path",
                Priority.LOW,
                "Critical CSS renders above-the-fold content before the full stylesheet loads.",
                "Set with: bin/magento config:set dev/css/use_css_critical_path 1"
            )
