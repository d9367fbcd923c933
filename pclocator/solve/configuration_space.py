import re
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pysat.solvers import Solver

from pclocator.core.errors import SolverError
from pclocator.core.logging import get_logger
from pclocator.solve.feature_model import FeatureModel, load_feature_model

if TYPE_CHECKING:
    from pclocator.pc.pc_types import PresenceCondition

logger = get_logger(__name__)

TimeLimit = Union[None, int, float, str]

TIME_LIMIT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
TIME_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}

# Solvers whose PySAT bindings support interrupt() during solve_limited()
INTERRUPTIBLE_SOLVERS = {
    "glucose3", "g3", "glucose30", "g30", "glucose4", "g4", "glucose41", "g41",
    "glucose42", "g42", "minisat22", "m22", "msat22", "minisat-gh", "mgh", "msat-gh",
    "maplechrono", "mcb", "maplecm", "mcm", "maplesat", "mpl", "mergesat3", "mg3",
    "cadical195", "cd19", "gluecard3", "gc3", "gluecard4", "gc4", "minicard", "mc",
}

def parse_time_limit(value: TimeLimit) -> Optional[float]:
    """
    Converts a time budget to seconds. Accepts plain numbers (seconds) and
    strings such as '500ms', '30s', '2m' or '1h'. None means no budget.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    elif isinstance(value, str):
        match = TIME_LIMIT_RE.match(value)
        if not match:
            raise ValueError(f"Invalid time limit '{value}'")
        seconds = float(match.group(1)) * TIME_UNITS[match.group(2) or "s"]
    else:
        raise ValueError(f"Invalid time limit {value!r}")
    if seconds < 0:
        raise ValueError(f"Time limit must not be negative, got {value!r}")
    return seconds

class Configuration(BaseModel):
    """One concrete feature selection."""
    model_config = ConfigDict(frozen=True)

    selection: Dict[str, bool]

    def selected(self) -> List[str]:
        return sorted(name for name, value in self.selection.items() if value)

    def __getitem__(self, name: str) -> bool:
        return self.selection[name]

    def __str__(self) -> str:
        return " ".join(name if value else f"!{name}" for name, value in sorted(self.selection.items()))

class ConfigurationSpace(BaseModel):
    """
    Feature selections satisfying a presence condition under a feature model.
    Truncated at `limit` members or when the time budget ran out.
    """
    presence_condition: str
    configurations: List[Configuration] = Field(default_factory=list)
    limit: int = Field(ge=0)
    exhausted: bool = False
    timed_out: bool = False
    duration: float = 0.0

    def __len__(self) -> int:
        return len(self.configurations)

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self.configurations)

    def is_empty(self) -> bool:
        return not self.configurations

    def __str__(self) -> str:
        if self.is_empty():
            return "(no configurations)"
        return "\n".join(str(c) for c in self.configurations)

def encode_condition(condition: "PresenceCondition",
                     model: FeatureModel) -> Tuple[List[List[int]], List[Tuple[int, str]]]:
    """
    Encodes a DNF condition on top of the feature model clauses.
    Returns the clauses and the (variable, name) projection to enumerate over.
    Condition variables unknown to the model become fresh, unconstrained variables.
    """
    features = dict(model.features)
    next_var = model.num_vars + 1
    for name in sorted(condition.variables()):
        if name not in features:
            logger.debug(f"Feature {name} is not part of {model.source}, leaving it unconstrained")
            features[name] = next_var
            next_var += 1

    clauses = [list(c) for c in model.clauses]
    if not condition.is_true():
        if len(condition.terms) == 1:
            for lit in condition.terms[0].lits:
                clauses.append([-features[lit.name] if lit.neg else features[lit.name]])
        else:
            selectors = []
            for term in condition.terms:
                selector = next_var
                next_var += 1
                selectors.append(selector)
                for lit in term.lits:
                    var = features[lit.name]
                    clauses.append([-selector, -var if lit.neg else var])
            clauses.append(selectors)

    projection = sorted(((var, name) for name, var in features.items()), key=lambda p: p[0])
    return clauses, projection

def _solve(solver: Solver, solver_name: str, deadline: Optional[float]) -> Optional[bool]:
    """Runs one solver call. Returns None when the deadline interrupted it."""
    if deadline is None:
        return solver.solve()
    remaining = deadline - time.perf_counter()
    if remaining <= 0:
        return None
    if solver_name not in INTERRUPTIBLE_SOLVERS:
        return solver.solve()
    timer = threading.Timer(remaining, solver.interrupt)
    timer.start()
    try:
        return solver.solve_limited(expect_interrupt=True)
    finally:
        timer.cancel()
        solver.clear_interrupt()

def enumerate_configurations(condition: "PresenceCondition", dimacs_path: Union[str, Path],
                             limit: int, time_limit: TimeLimit = None,
                             solver_name: str = "glucose4") -> ConfigurationSpace:
    """
    Enumerates up to `limit` configurations satisfying `condition` under the
    feature model at `dimacs_path`. An unsatisfiable condition yields an empty
    space; an elapsed time budget yields whatever was found so far.
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    seconds = parse_time_limit(time_limit)
    model = load_feature_model(dimacs_path)

    start = time.perf_counter()
    deadline = start + seconds if seconds is not None else None
    space = ConfigurationSpace(presence_condition=str(condition), limit=limit)
    if limit == 0:
        return space
    if condition.is_false():
        space.exhausted = True
        return space

    clauses, projection = encode_condition(condition, model)
    try:
        with Solver(name=solver_name, bootstrap_with=clauses) as solver:
            while len(space.configurations) < limit:
                outcome = _solve(solver, solver_name, deadline)
                if outcome is None:
                    space.timed_out = True
                    break
                if not outcome:
                    space.exhausted = True
                    break
                assignment = set(solver.get_model())
                selection = {name: var in assignment for var, name in projection}
                space.configurations.append(Configuration(selection=selection))
                if not projection:
                    space.exhausted = True
                    break
                solver.add_clause([-var if selection[name] else var for var, name in projection])
    except Exception as e:
        raise SolverError(f"Solver {solver_name} failed on {model.source}: {e}") from e

    space.duration = time.perf_counter() - start
    logger.debug(
        f"Enumerated {len(space)} configuration(s) for '{space.presence_condition}' "
        f"(limit={limit}, exhausted={space.exhausted}, timed_out={space.timed_out})"
    )
    return space
