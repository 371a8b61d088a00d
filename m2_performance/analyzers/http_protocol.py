"""HTTPS base URLs and web server protocol features."""

import re
from pathlib import Path

from ..models.data_models import Priority
from .base import BaseAnalyzer, ModeAware


NGINX_CANDIDATES = (
    "nginx.conf",
    "nginx.conf.sample",
    "/etc/nginx/nginx.conf",
)

HTTP2_PATTERN = re.compile(r"listen\s+[^;]*\bhttp2\b|^\s*http2\s+on\s*;", re.MULTILINE)
GZIP_PATTERN = re.compile(r"^\s*gzip\s+on\s*;", re.MULTILINE)


class HttpProtocolAnalyzer(ModeAware, BaseAnalyzer):
    
    area = "protocol"
    
    def analyze(self) -> None:
        self.check_secure_urls()
        
        nginx_conf = self.find_nginx_config()
        if nginx_conf is None:
            self.logger.debug("No nginx configuration found")
            return
        
        try:
            content = nginx_conf.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            self.logger.debug(f"Cannot read {nginx_conf}: {e}")
            return
        
        if not HTTP2_PATTERN.search(content):
            self.collector.add_with_files(
                self.area,
                "Enable HTTP/2",
                Priority.MEDIUM,
                "HTTP/2 multiplexes asset requests over one connection.",
                [str(nginx_conf)],
                "Add 'http2' to the listen directive of the TLS server block."
            )
        if not GZIP_PATTERN.search(content):
            self.collector.add_with_files(
                self.area,
                "Enable gzip compression",
                Priority.MEDIUM,
                "gzip is not enabled in the nginx configuration.",
                [str(nginx_conf)]
            )
    
    def check_secure_urls(self):
        if self.is_in_developer_mode():
            return
        
        base_url = str(self.config_value("web/secure/base_url", "") or "")
        if base_url and not base_url.startswith("https://"):
            self.recommend(
                "Serve the store over HTTPS",
                Priority.HIGH,
                f"web/secure/base_url is '{base_url}'. Browsers only use HTTP/2 over TLS."
            )
        
        for path in ("web/secure/use_in_frontend", "web/secure/use_in_adminhtml"):
            if str(self.config_value(path, "0")) != "1":
                self.recommend(
                    f"Enable {path}",
                    Priority.MEDIUM,
                    "Secure URLs are not used everywhere, causing redirects between HTTP and HTTPS.",
                    f"Set with: bin/magento config:set {path} 1"
                )
    
    def find_nginx_config(self):
        for candidate in NGINX_CANDIDATES:
            path = Path(candidate)
            if not path.is_absolute():
                path = self.root / path
            if path.is_file():
                return path
        return None
