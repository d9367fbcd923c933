"""
pclocator: presence conditions and configuration spaces for files of
configurable C projects.
"""
from pclocator.core.errors import (
    PCLocatorError, PathError, FileResolutionError, ProjectBoundaryError,
    IndexReadError, MalformedConditionError, IncompatibleConditionError,
    FeatureModelError, SolverError, ConfigError
)
from pclocator.pc import Dialect, PresenceCondition, Implementation, parse_dnf, KMAX_PLAIN, KMAX_MULTI
from pclocator.solve import Configuration, ConfigurationSpace, FeatureModel, load_feature_model
from pclocator.kmax import BuildConditionScanner
from pclocator.locate import PresenceConditionLocator, BuildSystemLocator, ConfigurationSpaceLocator
from pclocator.config import LocatorConfig

__all__ = [
    "PCLocatorError", "PathError", "FileResolutionError", "ProjectBoundaryError",
    "IndexReadError", "MalformedConditionError", "IncompatibleConditionError",
    "FeatureModelError", "SolverError", "ConfigError",
    "Dialect", "PresenceCondition", "Implementation", "parse_dnf", "KMAX_PLAIN", "KMAX_MULTI",
    "Configuration", "ConfigurationSpace", "FeatureModel", "load_feature_model",
    "BuildConditionScanner",
    "PresenceConditionLocator", "BuildSystemLocator", "ConfigurationSpaceLocator",
    "LocatorConfig"
]
