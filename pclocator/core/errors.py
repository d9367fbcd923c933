class PCLocatorError(Exception):
    """Base exception for all pclocator related errors."""
    pass

class PathError(PCLocatorError):
    """Raised when a target file cannot be resolved inside the project."""
    pass

class FileResolutionError(PathError):
    """Raised when the target file does not exist."""
    pass

class ProjectBoundaryError(PathError):
    """Raised when the target file lies outside the project root."""
    pass

class IndexReadError(PCLocatorError):
    """Raised when the build-condition index file cannot be read."""
    pass

class MalformedConditionError(PCLocatorError):
    """Raised when raw DNF text cannot be parsed into a presence condition."""
    pass

class IncompatibleConditionError(PCLocatorError):
    """Raised when conjoining presence conditions of different dialects."""
    pass

class FeatureModelError(PCLocatorError):
    """Raised when a DIMACS feature model cannot be loaded or parsed."""
    pass

class SolverError(PCLocatorError):
    """Raised when the SAT solver fails while enumerating configurations."""
    pass

class ConfigError(PCLocatorError):
    """Raised when the locator configuration is invalid."""
    pass
