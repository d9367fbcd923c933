import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from pclocator.core.errors import ConfigError
from pclocator.core.history import History
from pclocator.locate.locators import BuildSystemLocator, ConfigurationSpaceLocator, PresenceConditionLocator
from pclocator.pc.dnf_parse import KMAX_PLAIN, Implementation
from pclocator.solve.configuration_space import parse_time_limit

ENV_FIELDS = {
    "PCLOCATOR_DIMACS": "dimacs_path",
    "PCLOCATOR_KMAX": "kmax_path",
    "PCLOCATOR_ROOT": "project_root",
    "PCLOCATOR_LIMIT": "limit",
    "PCLOCATOR_TIME_LIMIT": "time_limit",
    "PCLOCATOR_SOLVER": "solver_name",
}

class LocatorConfig(BaseModel):
    """Configuration of the locate-then-solve pipeline."""
    dimacs_path: str
    kmax_path: Optional[str] = None
    project_root: str = "."
    limit: int = Field(default=1, ge=0)
    time_limit: Optional[float] = None  # seconds
    solver_name: str = "glucose4"
    object_suffixes: Dict[str, str] = Field(default_factory=lambda: {".c": ".o"})

    @field_validator('time_limit', mode='before')
    @classmethod
    def validate_time_limit(cls, v: Any) -> Optional[float]:
        return parse_time_limit(v)

    @classmethod
    def from_env_or_file(cls, overrides: Optional[Dict[str, Any]] = None) -> 'LocatorConfig':
        """
        Layers the JSON file named by PCLOCATOR_CONFIG_PATH, then PCLOCATOR_*
        environment variables, then explicit overrides.
        """
        data: Dict[str, Any] = {}

        config_path = os.environ.get("PCLOCATOR_CONFIG_PATH")
        if config_path:
            try:
                loaded = json.loads(Path(config_path).read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Cannot load config file {config_path}: {e}") from e
            if not isinstance(loaded, dict):
                raise ConfigError(f"Config file {config_path} must hold a JSON object, got {type(loaded).__name__}")
            data.update(loaded)

        for env_name, field_name in ENV_FIELDS.items():
            value = os.environ.get(env_name)
            if value:
                data[field_name] = value

        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid locator configuration: {e}") from e

    def build_locator(self, locator: PresenceConditionLocator,
                      implementation: Implementation = KMAX_PLAIN,
                      history: Optional[History] = None) -> ConfigurationSpaceLocator:
        """Wraps an upstream locator into the configured pipeline."""
        if self.kmax_path:
            locator = BuildSystemLocator(
                locator, implementation, self.kmax_path, self.project_root,
                history=history, object_suffixes=self.object_suffixes
            )
        return ConfigurationSpaceLocator(
            locator, self.dimacs_path, self.limit, self.time_limit, solver_name=self.solver_name
        )
