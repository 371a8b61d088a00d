"""Layout XML blocks that disable full page caching."""

from pathlib import Path
from typing import Iterator

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


CACHEABLE_FALSE = 'cacheable="false"'

LAYOUT_GLOBS = (
    "app/code/*/*/view/*/layout/*.xml",
    "app/design/*/*/*/layout/*.xml",
    "app/design/*/*/*/*/layout/*.xml",
    "vendor/*/*/view/*/layout/*.xml",
)

# Core packages are assumed to know what they mark uncacheable
CORE_VENDORS = ("magento",)


class LayoutCacheAnalyzer(ModeAware, BaseAnalyzer):
    """Finds ``cacheable="false"`` in layout files.
    
    In ``default.xml`` the attribute disables full page caching for every
    page on the store, so it is reported as High.
    """
    
    area = "caching"
    
    def analyze(self) -> None:
        global_hits = []
        page_hits = []
        
        for path in self.layout_files():
            try:
                content = path.read_text(encoding="utf-8", errors="ignore")
            except OSError as e:
                self.logger.debug(f"Skipping unreadable {path}: {e}")
                continue
            
            if CACHEABLE_FALSE not in content:
                continue
            
            if path.name == "default.xml":
                global_hits.append(self.relative(path))
            else:
                page_hits.append(self.relative(path))
        
        if global_hits:
            self.recommend(
                "Remove cacheable=\"false\" from default.xml",
                Priority.HIGH,
                f"{len(global_hits)} default.xml layout files disable full page cache for the entire store.",
                "A single uncacheable block in default.xml makes every page uncacheable. Load the "
                "dynamic content with customer-data sections or AJAX instead.",
                files=global_hits
            )
        
        if page_hits:
            self.recommend(
                "Review uncacheable layout handles",
                Priority.LOW if self.is_in_developer_mode() else Priority.MEDIUM,
                f"{len(page_hits)} layout files mark blocks as cacheable=\"false\".",
                "Pages using these handles bypass full page cache.",
                files=page_hits
            )
    
    def layout_files(self) -> Iterator[Path]:
        for pattern in LAYOUT_GLOBS:
            for path in sorted(self.root.glob(pattern)):
                if pattern.startswith("vendor/"):
                    vendor = path.relative_to(self.root).parts[1]
                    if vendor.lower() in CORE_VENDORS:
                        continue
                yield path
