"""Analyzer registry, profiles and area filters."""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Type

from ..analysis.collector import RecommendationCollector
from ..analyzers import (
    APIRateLimitingAnalyzer, AdobeCommerceAnalyzer, BaseAnalyzer, CacheAnalyzer,
    CodebaseAnalyzer, ConfigurationAnalyzer, DatabaseAnalyzer, FrontendAnalyzer,
    HttpProtocolAnalyzer, IndexersAnalyzer, LayoutCacheAnalyzer, ModeAware,
    ModulesAnalyzer, OpCacheAnalyzer, RedisAnalyzer, SecurityChecklistAnalyzer,
    UptimeAnalyzer, VarnishPerformanceAnalyzer
)
from ..models.data_models import EnvironmentSnapshot
from ..utils.logging import get_logger


logger = get_logger("profiles")


# Registration order is execution order in sync mode
ANALYZER_CLASSES: Dict[str, Type[BaseAnalyzer]] = {
    "config": ConfigurationAnalyzer,
    "cache": CacheAnalyzer,
    "database": DatabaseAnalyzer,
    "modules": ModulesAnalyzer,
    "codebase": CodebaseAnalyzer,
    "frontend": FrontendAnalyzer,
    "indexers": IndexersAnalyzer,
    "opcache": OpCacheAnalyzer,
    "redis": RedisAnalyzer,
    "api-security": APIRateLimitingAnalyzer,
    "security": SecurityChecklistAnalyzer,
    "layout-cache": LayoutCacheAnalyzer,
    "uptime": UptimeAnalyzer,
    "protocol": HttpProtocolAnalyzer,
    "varnish": VarnishPerformanceAnalyzer,
}

ENTERPRISE_ANALYZER_CLASSES: Dict[str, Type[BaseAnalyzer]] = {
    "commerce": AdobeCommerceAnalyzer,
}


class Profile(str, Enum):
    """Named analyzer subsets."""
    BASIC = "basic"
    SECURITY = "security"
    FULL = "full"
    
    @classmethod
    def resolve(cls, name: Optional[str]) -> "Profile":
        """Map a profile name to a member. Unknown names mean FULL."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            if name:
                logger.info(f"Unknown profile '{name}', using full")
            return cls.FULL
    
    @property
    def keys(self) -> Optional[FrozenSet[str]]:
        """Analyzer keys in this profile, ``None`` for everything registered."""
        return PROFILE_KEYS[self]
    
    @property
    def description(self) -> str:
        return PROFILE_DESCRIPTIONS[self]


PROFILE_KEYS: Dict[Profile, Optional[FrozenSet[str]]] = {
    Profile.BASIC: frozenset({"config", "cache", "redis", "opcache", "uptime", "varnish"}),
    Profile.SECURITY: frozenset({"security", "api-security", "uptime"}),
    Profile.FULL: None,
}

PROFILE_DESCRIPTIONS: Dict[Profile, str] = {
    Profile.BASIC: "Quick check of configuration, caching layers and host health",
    Profile.SECURITY: "Admin hardening and API exposure",
    Profile.FULL: "Every available analyzer",
}


class AreaTag(str, Enum):
    """Tags accepted by the area filter."""
    CACHE = "cache"
    CACHING = "caching"
    DATABASE = "database"
    FRONTEND = "frontend"
    MODULES = "modules"
    SECURITY = "security"
    CONFIG = "config"
    OPCACHE = "opcache"
    REDIS = "redis"
    INDEXING = "indexing"
    CODEBASE = "codebase"
    PROTOCOL = "protocol"
    COMMERCE = "commerce"
    VARNISH = "varnish"
    
    @property
    def keys(self) -> List[str]:
        return AREA_KEYS[self]


AREA_KEYS: Dict[AreaTag, List[str]] = {
    AreaTag.CACHE: ["cache"],
    AreaTag.CACHING: ["cache", "layout-cache", "varnish"],
    AreaTag.DATABASE: ["database"],
    AreaTag.FRONTEND: ["frontend"],
    AreaTag.MODULES: ["modules"],
    AreaTag.SECURITY: ["security", "api-security"],
    AreaTag.CONFIG: ["config"],
    AreaTag.OPCACHE: ["opcache"],
    AreaTag.REDIS: ["redis"],
    AreaTag.INDEXING: ["indexers"],
    AreaTag.CODEBASE: ["codebase"],
    AreaTag.PROTOCOL: ["protocol"],
    AreaTag.COMMERCE: ["commerce"],
    AreaTag.VARNISH: ["varnish"],
}


def resolve_areas(areas: Optional[str]) -> List[str]:
    """Turn ``"cache, security"`` into analyzer keys.
    
    Unknown tags are ignored. Each key appears once.
    """
    keys: List[str] = []
    for token in (areas or "").split(","):
        token = token.strip().lower()
        if not token:
            continue
        try:
            tag = AreaTag(token)
        except ValueError:
            logger.info(f"Ignoring unknown area '{token}'")
            continue
        for key in tag.keys:
            if key not in keys:
                keys.append(key)
    return keys


class AnalyzerRegistry:
    """Builds and narrows the analyzer set for one run."""
    
    def __init__(self, analyzer_options: Optional[Dict[str, dict]] = None):
        """Initialize registry.
        
        Args:
            analyzer_options: Extra constructor keyword arguments per analyzer key
        """
        self.analyzer_options = analyzer_options or {}
    
    @staticmethod
    def available_keys(is_enterprise: bool = False) -> List[str]:
        keys = list(ANALYZER_CLASSES)
        if is_enterprise:
            keys.extend(ENTERPRISE_ANALYZER_CLASSES)
        return keys
    
    def build(
        self,
        snapshot: EnvironmentSnapshot,
        collector: RecommendationCollector
    ) -> Dict[str, BaseAnalyzer]:
        """Instantiate every analyzer for the snapshot.
        
        Args:
            snapshot: Loaded configuration of the target installation
            collector: Sink shared by all analyzers of this run
            
        Returns:
            Ordered mapping of analyzer key to analyzer
        """
        classes = dict(ANALYZER_CLASSES)
        if snapshot.is_enterprise:
            classes.update(ENTERPRISE_ANALYZER_CLASSES)
        
        analyzers = {}
        for key, analyzer_class in classes.items():
            analyzers[key] = analyzer_class(
                snapshot.root, snapshot, collector, name=key,
                **self.analyzer_options.get(key, {})
            )
        
        logger.debug(f"Built {len(analyzers)} analyzers")
        return analyzers
    
    @staticmethod
    def select_profile(analyzers: Dict[str, BaseAnalyzer], profile) -> Dict[str, BaseAnalyzer]:
        """Narrow to a profile, keeping registration order.
        
        Args:
            analyzers: Output of :meth:`build`
            profile: :class:`Profile` or profile name
        """
        if not isinstance(profile, Profile):
            profile = Profile.resolve(profile)
        
        keys = profile.keys
        if keys is None:
            return dict(analyzers)
        return {key: analyzer for key, analyzer in analyzers.items() if key in keys}
    
    @staticmethod
    def filter_by_areas(analyzers: Dict[str, BaseAnalyzer], areas: Optional[str]) -> Dict[str, BaseAnalyzer]:
        """Narrow further by an area filter string.
        
        Never adds analyzers that are not already in ``analyzers``. An empty
        filter leaves the set untouched.
        """
        if not areas or not areas.strip():
            return dict(analyzers)
        
        wanted = set(resolve_areas(areas))
        return {key: analyzer for key, analyzer in analyzers.items() if key in wanted}
    
    @staticmethod
    def configure_for_mode(
        analyzers: Iterable[BaseAnalyzer],
        dev_mode_aware: bool,
        magento_mode: str
    ) -> int:
        """Pass mode hints to every analyzer that supports them.
        
        Returns:
            Number of analyzers configured
        """
        configured = 0
        for analyzer in analyzers:
            if isinstance(analyzer, ModeAware):
                analyzer.set_dev_mode_aware(dev_mode_aware)
                analyzer.set_magento_mode(magento_mode)
                configured += 1
        return configured
    
    def prepare(
        self,
        snapshot: EnvironmentSnapshot,
        collector: RecommendationCollector,
        profile=Profile.FULL,
        areas: Optional[str] = None,
        dev_mode_aware: bool = False
    ) -> Dict[str, BaseAnalyzer]:
        """Build, select, filter and configure in one step."""
        analyzers = self.filter_by_areas(
            self.select_profile(self.build(snapshot, collector), profile), areas
        )
        self.configure_for_mode(analyzers.values(), dev_mode_aware, snapshot.mode)
        return analyzers
