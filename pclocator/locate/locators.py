from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, Union

from pclocator.core.history import History, LoggingHistory
from pclocator.core.logging import get_logger
from pclocator.core.measurement import Measurement
from pclocator.kmax.scanner import BuildConditionScanner
from pclocator.pc.dnf_parse import Implementation
from pclocator.pc.pc_types import PresenceCondition
from pclocator.solve.configuration_space import ConfigurationSpace, TimeLimit

logger = get_logger(__name__)

class PresenceConditionLocator(Protocol):
    """Annotates a file with a presence condition per location (e.g. line number)."""
    name: str

    def annotate(self, file_path: Union[str, Path]) -> Dict[int, PresenceCondition]:
        ...

class BuildSystemLocator:
    """
    Refines the presence conditions of an upstream locator with the
    build-system conditions Kmax recorded for the file.
    """
    def __init__(self, locator: PresenceConditionLocator, implementation: Implementation,
                 kmax_path: Union[str, Path], project_root: Union[str, Path],
                 history: Optional[History] = None,
                 object_suffixes: Optional[Mapping[str, str]] = None):
        self.locator = locator
        self.implementation = implementation
        self.kmax_path = kmax_path
        self.project_root = project_root
        self.history = history if history is not None else LoggingHistory()
        self.object_suffixes = object_suffixes

    @property
    def name(self) -> str:
        return f"{self.locator.name} + kmax"

    def scanner(self, file_path: Union[str, Path]) -> BuildConditionScanner:
        return BuildConditionScanner(
            self.implementation, self.kmax_path, self.project_root, file_path,
            history=self.history, object_suffixes=self.object_suffixes
        )

    def annotate(self, file_path: Union[str, Path]) -> Dict[int, PresenceCondition]:
        scanner = self.scanner(file_path)
        # Resolve the file before asking the upstream locator
        scanner.locate_presence_conditions()
        located = self.locator.annotate(file_path)
        return {key: scanner.combine(pc) for key, pc in located.items()}

class ConfigurationSpaceLocator:
    """Turns the presence conditions of a locator into configuration spaces."""
    def __init__(self, locator: PresenceConditionLocator, dimacs_path: Union[str, Path],
                 limit: int, time_limit: TimeLimit = None, solver_name: str = "glucose4"):
        self.locator = locator
        self.dimacs_path = dimacs_path
        self.limit = limit
        self.time_limit = time_limit
        self.solver_name = solver_name
        self.last_measurement: Optional[Measurement] = None

    @property
    def name(self) -> str:
        return f"{self.locator.name} config"

    def annotate(self, file_path: Union[str, Path]) -> Dict[int, ConfigurationSpace]:
        """
        Locates the presence conditions of `file_path` and enumerates a
        configuration space for each. A failing location fails the batch.
        """
        begin = Measurement()
        located = self.locator.annotate(file_path)
        spaces = {
            key: pc.to_configuration_space(self.dimacs_path, self.limit, self.time_limit,
                                           solver_name=self.solver_name)
            for key, pc in located.items()
        }
        self.last_measurement = Measurement().difference(begin)
        logger.info(f"{self.name}: {len(spaces)} location(s) in {file_path} took {self.last_measurement}")
        return spaces
