"""Pydantic models shared by analyzers, orchestrator and presentation."""

from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Priority(IntEnum):
    """Severity of a finding. Ordered: HIGH > MEDIUM > LOW."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    
    @property
    def label(self) -> str:
        return self.name.capitalize()
    
    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Priority"]:
        """Map ``low|medium|high`` to a member, ``None`` for anything else."""
        if not value:
            return None
        return cls.__members__.get(value.strip().upper())


class Recommendation(BaseModel):
    """A single finding. Immutable once created."""
    
    model_config = ConfigDict(frozen=True)
    
    area: str
    title: str
    priority: Priority
    details: str
    explanation: Optional[str] = None
    files: Tuple[str, ...] = ()
    metadata: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    
    @field_validator("metadata")
    @classmethod
    def freeze_metadata(cls, v):
        return MappingProxyType(dict(v))
    
    @field_serializer("metadata")
    def serialize_metadata(self, v):
        return dict(v)
    
    def has_files(self) -> bool:
        return bool(self.files)
    
    def has_metadata(self) -> bool:
        return bool(self.metadata)


class AnalyzerOutcome(BaseModel):
    """Result of executing one analyzer."""
    key: str
    name: str
    status: str = "completed"
    error: Optional[str] = None
    elapsed_ms: Optional[float] = None
    recommendations_added: int = 0
    
    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in ("completed", "failed"):
            raise ValueError(f"Unknown outcome status: {v}")
        return v
    
    @property
    def failed(self) -> bool:
        return self.status == "failed"


class EnvironmentSnapshot(BaseModel):
    """Everything an analyzer is constructed with besides the collector."""
    root: str
    config: Dict[str, Any] = Field(default_factory=dict)
    deployment: Dict[str, Any] = Field(default_factory=dict)
    env_overrides: Dict[str, str] = Field(default_factory=dict)
    modules: Dict[str, int] = Field(default_factory=dict)
    composer: Dict[str, Any] = Field(default_factory=dict)
    is_enterprise: bool = False
    mode: str = "default"
    
    def config_value(self, path: str, default: Any = None) -> Any:
        """Look up a core config path such as ``web/secure/base_url``.
        
        Falls back to the ``MAGENTO_WEB_SECURE_BASE_URL`` style variable
        captured when the snapshot was loaded.
        """
        if path in self.config:
            return self.config[path]
        env_name = "MAGENTO_" + path.replace("/", "_").upper()
        return self.env_overrides.get(env_name, default)
    
    def deployment_value(self, path: str, default: Any = None) -> Any:
        """Walk the env.php array with a slash separated path."""
        value: Any = self.deployment
        for key in path.split("/"):
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value


class AnalysisRunResult(BaseModel):
    """A completed run: recommendations plus timing metadata."""
    mode: str
    recommendations: List[Recommendation] = Field(default_factory=list)
    outcomes: List[AnalyzerOutcome] = Field(default_factory=list)
    timings: Dict[str, float] = Field(default_factory=dict)
    total_ms: float = 0.0
    executed: int = 0
    available: int = 0
    
    @property
    def failed_outcomes(self) -> List[AnalyzerOutcome]:
        return [o for o in self.outcomes if o.failed]


class PerformanceScore(BaseModel):
    """0-100 score and letter grade."""
    score: float = Field(..., ge=0.0, le=100.0)
    grade: str
    high: int = 0
    medium: int = 0
    low: int = 0
    
    @property
    def total(self) -> int:
        return self.high + self.medium + self.low


class RecommendationSummary(BaseModel):
    """Counts used by the summary view."""
    total: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    by_area: Dict[str, int] = Field(default_factory=dict)
