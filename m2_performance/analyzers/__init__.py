"""Analyzer implementations."""

from .base import BaseAnalyzer, ModeAware
from .configuration import ConfigurationAnalyzer
from .cache import CacheAnalyzer
from .database import DatabaseAnalyzer
from .modules import ModulesAnalyzer
from .codebase import CodebaseAnalyzer
from .frontend import FrontendAnalyzer
from .indexers import IndexersAnalyzer
from .opcache import OpCacheAnalyzer
from .redis import RedisAnalyzer
from .api_rate_limiting import APIRateLimitingAnalyzer
from .security_checklist import SecurityChecklistAnalyzer
from .layout_cache import LayoutCacheAnalyzer
from .uptime import UptimeAnalyzer
from .http_protocol import HttpProtocolAnalyzer
from .varnish import VarnishPerformanceAnalyzer
from .adobe_commerce import AdobeCommerceAnalyzer

__all__ = [
    "BaseAnalyzer",
    "ModeAware",
    "ConfigurationAnalyzer",
    "CacheAnalyzer",
    "DatabaseAnalyzer",
    "ModulesAnalyzer",
    "CodebaseAnalyzer",
    "FrontendAnalyzer",
    "IndexersAnalyzer",
    "OpCacheAnalyzer",
    "RedisAnalyzer",
    "APIRateLimitingAnalyzer",
    "SecurityChecklistAnalyzer",
    "LayoutCacheAnalyzer",
    "UptimeAnalyzer",
    "HttpProtocolAnalyzer",
    "VarnishPerformanceAnalyzer",
    "AdobeCommerceAnalyzer",
]
