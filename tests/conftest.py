"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
from unittest.mock import Mock

from m2_performance.analysis.collector import RecommendationCollector
from m2_performance.analyzers.base import BaseAnalyzer, ModeAware
from m2_performance.models.data_models import EnvironmentSnapshot, Priority
from m2_performance.utils.config import Config


class StaticAnalyzer(ModeAware, BaseAnalyzer):
    """Emits a fixed list of (title, priority) findings."""
    
    area = "test"
    
    def __init__(self, *args, findings=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.findings = list(findings)
        self.calls = 0
    
    def analyze(self):
        self.calls += 1
        for title, priority in self.findings:
            self.recommend(title, priority, f"{title} details")


class BarrierAnalyzer(StaticAnalyzer):
    """Waits for every peer to start before emitting findings."""
    
    def __init__(self, *args, barrier=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.barrier = barrier
    
    def analyze(self):
        self.barrier.wait(timeout=5)
        super().analyze()


class FailingAnalyzer(BaseAnalyzer):
    """Always raises."""
    
    area = "test"
    
    def analyze(self):
        raise RuntimeError("boom")


@pytest.fixture
def mock_config():
    """Mock configuration for testing."""
    config = Mock(spec=Config)
    config.log_level = "WARNING"
    config.log_file = ""
    config.process_limit = 4
    config.watch_interval = 0.01
    config.default_profile = "full"
    config.allow_dev_mode = False
    config.debug_config = False
    return config


@pytest.fixture
def collector():
    return RecommendationCollector()


@pytest.fixture
def magento_root(tmp_path):
    """Minimal Magento directory layout."""
    (tmp_path / "app" / "etc").mkdir(parents=True)
    (tmp_path / "app" / "code").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def snapshot(magento_root):
    """Snapshot of a production store with a few common misconfigurations."""
    return EnvironmentSnapshot(
        root=str(magento_root),
        config={
            "catalog/search/engine": "opensearch",
            "web/secure/base_url": "https://shop.example.com/",
            "web/secure/use_in_frontend": "1",
            "web/secure/use_in_adminhtml": "1",
            "dev/template/minify_html": "1",
            "dev/js/minify_files": "0",
            "dev/css/minify_files": "1",
            "system/full_page_cache/caching_application": "2",
            "system/full_page_cache/ttl": "3600",
        },
        deployment={
            "MAGE_MODE": "production",
            "backend": {"frontName": "admin"},
            "session": {"save": "files"},
            "cache_types": {"config": 1, "layout": 1, "full_page": 0},
            "db": {"connection": {"default": {"host": "localhost", "profiler": "1"}}},
        },
        modules={
            "Magento_Store": 1,
            "Magento_TwoFactorAuth": 0,
            "Magento_Developer": 1,
        },
        mode="production",
    )


@pytest.fixture
def developer_snapshot(snapshot):
    return snapshot.model_copy(update={"mode": "developer"})


@pytest.fixture
def make_static(snapshot):
    """Factory for StaticAnalyzer bound to a collector."""
    def factory(collector, findings, name="static"):
        return StaticAnalyzer(snapshot.root, snapshot, collector, name=name, findings=findings)
    return factory


@pytest.fixture
def make_failing(snapshot):
    def factory(collector, name="failing"):
        return FailingAnalyzer(snapshot.root, snapshot, collector, name=name)
    return factory


@pytest.fixture
def make_barrier(snapshot):
    def factory(collector, barrier, findings, name="barrier"):
        return BarrierAnalyzer(
            snapshot.root, snapshot, collector, name=name, findings=findings, barrier=barrier
        )
    return factory


@pytest.fixture
def fake_php_reader():
    """Return a php_reader that serves arrays keyed by file name."""
    def factory(files):
        def reader(path):
            return files.get(Path(path).name, {})
        return reader
    return factory
