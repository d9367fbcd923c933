from pclocator.solve.feature_model import FeatureModel, load_feature_model
from pclocator.solve.configuration_space import (
    Configuration, ConfigurationSpace, TimeLimit, encode_condition, enumerate_configurations, parse_time_limit
)

__all__ = [
    "FeatureModel", "load_feature_model",
    "Configuration", "ConfigurationSpace", "TimeLimit",
    "encode_condition", "enumerate_configurations", "parse_time_limit"
]
