"""
Core module for pclocator.
Provides error handling, logging, the history collaborator and measurements.
"""
from pclocator.core.errors import (
    PCLocatorError, PathError, FileResolutionError, ProjectBoundaryError,
    IndexReadError, MalformedConditionError, IncompatibleConditionError,
    FeatureModelError, SolverError, ConfigError
)
from pclocator.core.logging import get_logger
from pclocator.core.history import History, LoggingHistory
from pclocator.core.measurement import Measurement

__all__ = [
    "PCLocatorError", "PathError", "FileResolutionError", "ProjectBoundaryError",
    "IndexReadError", "MalformedConditionError", "IncompatibleConditionError",
    "FeatureModelError", "SolverError", "ConfigError",
    "get_logger",
    "History", "LoggingHistory",
    "Measurement"
]
