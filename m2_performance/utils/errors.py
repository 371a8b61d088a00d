"""Error types shared across the package."""


class M2PerformanceError(Exception):
    """Base class for all tool errors."""


class ConfigurationLoadError(M2PerformanceError):
    """Environment configuration could not be read.
    
    Fatal to a run: no analyzer can be constructed without a snapshot.
    """


class AnalyzerFailure(M2PerformanceError):
    """An analyzer raised while inspecting the environment."""
    
    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"Analyzer '{key}' failed: {cause}")
