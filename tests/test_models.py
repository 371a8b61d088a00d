"""Test data models."""

import pytest
from pydantic import ValidationError

from m2_performance.models.data_models import (
    AnalysisRunResult, AnalyzerOutcome, EnvironmentSnapshot, PerformanceScore,
    Priority, Recommendation
)


class TestPriority:
    """Test priority ordering and parsing."""
    
    def test_ordering(self):
        assert Priority.HIGH > Priority.MEDIUM > Priority.LOW
        assert sorted([Priority.MEDIUM, Priority.HIGH, Priority.LOW]) == [
            Priority.LOW, Priority.MEDIUM, Priority.HIGH
        ]
    
    def test_label(self):
        assert Priority.HIGH.label == "High"
        assert Priority.LOW.label == "Low"
    
    @pytest.mark.parametrize("value,expected", [
        ("high", Priority.HIGH),
        (" Medium ", Priority.MEDIUM),
        ("LOW", Priority.LOW),
        ("urgent", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, value, expected):
        assert Priority.parse(value) is expected


class TestRecommendation:
    """Test recommendation model."""
    
    def test_defaults(self):
        rec = Recommendation(area="cache", title="Enable FPC", priority=Priority.HIGH, details="d")
        
        assert rec.explanation is None
        assert rec.files == ()
        assert rec.metadata == {}
        assert not rec.has_files()
        assert not rec.has_metadata()
    
    def test_immutable(self):
        rec = Recommendation(area="cache", title="Enable FPC", priority=Priority.HIGH, details="d")
        
        with pytest.raises(ValidationError):
            rec.title = "changed"
    
    def test_files_and_metadata_read_only(self):
        rec = Recommendation(
            area="cache", title="Enable FPC", priority=Priority.HIGH, details="d",
            files=["app/etc/env.php"], metadata={"ttl": 3600}
        )
        
        with pytest.raises(AttributeError):
            rec.files.append("app/etc/config.php")
        with pytest.raises(TypeError):
            rec.metadata["ttl"] = 0
        assert rec.files == ("app/etc/env.php",)
        assert rec.metadata == {"ttl": 3600}
        assert rec.model_dump()["metadata"] == {"ttl": 3600}
    
    def test_default_metadata_read_only(self):
        rec = Recommendation(area="cache", title="Enable FPC", priority=Priority.HIGH, details="d")
        
        with pytest.raises(TypeError):
            rec.metadata["k"] = "v"
    
    def test_caller_dict_not_shared(self):
        source = {"ttl": 3600}
        rec = Recommendation(
            area="cache", title="Enable FPC", priority=Priority.HIGH, details="d", metadata=source
        )
        
        source["ttl"] = 0
        
        assert rec.metadata["ttl"] == 3600
    
    def test_priority_from_int(self):
        rec = Recommendation(area="cache", title="t", priority=2, details="d")
        assert rec.priority is Priority.MEDIUM


class TestAnalyzerOutcome:
    
    def test_failed_property(self):
        assert not AnalyzerOutcome(key="cache", name="cache").failed
        assert AnalyzerOutcome(key="cache", name="cache", status="failed", error="x").failed
    
    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            AnalyzerOutcome(key="cache", name="cache", status="running")


class TestEnvironmentSnapshot:
    """Test config lookups."""
    
    def test_config_value_prefers_loaded_config(self):
        snapshot = EnvironmentSnapshot(
            root="/srv",
            config={"catalog/search/engine": "opensearch"},
            env_overrides={"MAGENTO_CATALOG_SEARCH_ENGINE": "elasticsearch7"}
        )
        assert snapshot.config_value("catalog/search/engine") == "opensearch"
    
    def test_config_value_falls_back_to_environment(self):
        snapshot = EnvironmentSnapshot(
            root="/srv",
            env_overrides={"MAGENTO_CATALOG_SEARCH_ENGINE": "elasticsearch7"}
        )
        assert snapshot.config_value("catalog/search/engine") == "elasticsearch7"
        assert snapshot.config_value("web/secure/base_url", "none") == "none"
    
    def test_deployment_value(self):
        snapshot = EnvironmentSnapshot(
            root="/srv",
            deployment={"session": {"save": "redis"}, "MAGE_MODE": "production"}
        )
        assert snapshot.deployment_value("session/save") == "redis"
        assert snapshot.deployment_value("MAGE_MODE") == "production"
        assert snapshot.deployment_value("session/save/extra") is None
        assert snapshot.deployment_value("cache/frontend", {}) == {}


class TestResults:
    
    def test_failed_outcomes(self):
        result = AnalysisRunResult(
            mode="sync",
            outcomes=[
                AnalyzerOutcome(key="cache", name="cache"),
                AnalyzerOutcome(key="redis", name="redis", status="failed", error="refused"),
            ]
        )
        assert [o.key for o in result.failed_outcomes] == ["redis"]
    
    def test_score_bounds(self):
        assert PerformanceScore(score=81.0, grade="B+", high=2, medium=1).total == 3
        with pytest.raises(ValidationError):
            PerformanceScore(score=101.0, grade="A+")
