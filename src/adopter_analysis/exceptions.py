class AdopterAnalysisError(Exception):
    """Base class for all pipeline errors."""


class LoadError(AdopterAnalysisError):
    """Dataset file is missing, malformed, or has missing values."""


class ConfigError(AdopterAnalysisError):
    """Invalid configuration: unknown feature, algorithm, or parameter value."""


class EvaluationError(AdopterAnalysisError):
    """A metric is undefined for the given labels (e.g. single-class test set)."""
