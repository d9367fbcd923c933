"""
Presence conditions from a Kmax result file.

Kmax records the build-system condition of every compilation unit
("unit_pc drivers/net/foo.o <dnf>") and of every subdirectory the build
descends into ("subdir_pc drivers/net <dnf>"). A file is compiled only if
its own unit condition and the conditions of all its ancestor directories
hold, so all of them are conjoined with a source-level condition.

The result file is scanned linearly. Sorting it and doing a binary search
would be faster, but a linear scan is fast enough even for the Linux kernel.
"""
import os
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Optional, Tuple, Union

from pclocator.core.errors import FileResolutionError, IndexReadError, ProjectBoundaryError
from pclocator.core.history import History, LoggingHistory
from pclocator.core.logging import get_logger
from pclocator.pc.dnf_parse import Implementation
from pclocator.pc.pc_types import PresenceCondition

logger = get_logger(__name__)

UNIT_TAG = "unit_pc"
SUBDIR_TAG = "subdir_pc"
DEFAULT_OBJECT_SUFFIXES = {".c": ".o"}

HISTORY_NOTE = ("This presence condition has been located by Kmax. "
                "It originates from the build system and applies to the whole file.")

LookupKey = Tuple[str, str]

class ScanState(str, Enum):
    UNSCANNED = "unscanned"
    SCANNED = "scanned"

def object_identity(relative: PurePosixPath, object_suffixes: Mapping[str, str]) -> PurePosixPath:
    """Maps a source file to the compiled unit Kmax records conditions for."""
    suffix = object_suffixes.get(relative.suffix)
    if suffix is None:
        return relative
    return relative.with_suffix(suffix)

def lookup_keys_for(object_file: PurePosixPath) -> List[LookupKey]:
    """The unit key first, then every ancestor directory from the innermost outwards."""
    keys = [(UNIT_TAG, str(object_file))]
    for parent in object_file.parents:
        if str(parent) == ".":
            break
        keys.append((SUBDIR_TAG, str(parent)))
    return keys

def scan_index(index_path: Union[str, Path], keys: List[LookupKey]) -> Dict[LookupKey, str]:
    """
    Finds the condition text of every key in one pass over the index.

    A line matches a key when its first two fields equal the key's tag and
    path, so "subdir_pc foo" never matches "foobar". Every key matches its
    first line only; the pass stops as soon as all keys are found.
    """
    pending = set(keys)
    found: Dict[LookupKey, str] = {}
    try:
        with open(index_path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                parts = line.split()
                if len(parts) < 2:
                    continue
                key = (parts[0], parts[1])
                if key in pending:
                    pending.remove(key)
                    found[key] = " ".join(parts[2:])
                    if not pending:
                        break
                elif key in found:
                    logger.debug(f"Ignoring duplicate entry for {key[0]} {key[1]} at {index_path}:{lineno}")
    except (OSError, UnicodeDecodeError) as e:
        raise IndexReadError(f"Cannot read Kmax file {index_path}: {e}") from e
    return found

class BuildConditionScanner:
    """
    Locates the build-system presence conditions of one file.

    The index is scanned at most once per instance; the result is an outer
    list with one entry per located path component (unit first, then the
    ancestors innermost first), each holding one condition per dialect the
    implementation produces.
    """
    def __init__(self, implementation: Implementation, index_path: Union[str, Path],
                 project_root: Union[str, Path], file_path: Union[str, Path],
                 history: Optional[History] = None,
                 object_suffixes: Optional[Mapping[str, str]] = None):
        self.implementation = implementation
        self.index_path = Path(index_path)
        self.project_root = Path(project_root)
        self.file_path = Path(file_path)
        self.history = history if history is not None else LoggingHistory()
        self.object_suffixes = dict(object_suffixes) if object_suffixes is not None else dict(DEFAULT_OBJECT_SUFFIXES)
        self.state = ScanState.UNSCANNED
        self._conditions: List[List[PresenceCondition]] = []

    def object_file(self) -> PurePosixPath:
        """Resolves the target inside the project root and returns its object identity."""
        root = Path(os.path.normpath(self.project_root.absolute()))
        target = Path(os.path.normpath(self.file_path.absolute()))
        if not target.exists():
            raise FileResolutionError(f"File {target} does not exist")
        try:
            relative = target.relative_to(root)
        except ValueError as e:
            raise ProjectBoundaryError(f"Project root {root} does not contain {target}") from e
        return object_identity(PurePosixPath(relative.as_posix()), self.object_suffixes)

    def lookup_keys(self) -> List[LookupKey]:
        return lookup_keys_for(self.object_file())

    def locate_presence_conditions(self) -> List[List[PresenceCondition]]:
        """Scans the index on first use; later calls return the cached result."""
        if self.state is ScanState.UNSCANNED:
            keys = self.lookup_keys()
            found = scan_index(self.index_path, keys)
            # Both unit_pc and subdir_pc are unique if present, but every path
            # component may carry one
            self._conditions = [self.implementation.from_dnf(found[key]) for key in keys if key in found]
            self.state = ScanState.SCANNED
            logger.debug(f"Located {len(found)} Kmax entries for {self.file_path}")
            self.history.add(self, HISTORY_NOTE)
        return self._conditions

    def describe(self) -> str:
        """Renders the located first-dialect conditions joined by &&."""
        rendered = []
        for pcs in self.locate_presence_conditions():
            if not pcs:
                continue
            pc = pcs[0]
            rendered.append(f"({pc})" if len(pc.terms) > 1 else str(pc))
        if not rendered:
            return "True"
        return "&&".join(rendered)

    def __str__(self) -> str:
        return self.describe()

    def combine(self, presence_condition: PresenceCondition) -> PresenceCondition:
        """
        Conjoins the located conditions with `presence_condition`, outermost
        ancestor first and the unit condition last. Conditions of another
        dialect than the running result are skipped.
        """
        for pcs in reversed(self.locate_presence_conditions()):
            for pc in pcs:
                if pc.compatible(presence_condition):
                    presence_condition = pc.and_(presence_condition)
        return presence_condition
