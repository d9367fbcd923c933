import re
from enum import Enum
from itertools import product
from pathlib import Path
from typing import FrozenSet, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from pclocator.core.errors import IncompatibleConditionError
from pclocator.solve.configuration_space import ConfigurationSpace, TimeLimit, enumerate_configurations

NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")

# --- Dialect ---

class Dialect(str, Enum):
    """
    Closed set of presence condition dialects. Conditions of different
    dialects range over different variable universes and never mix.
    """
    PLAIN = "plain"      # A && !B
    DEFINED = "defined"  # defined(A) && !defined(B)

    def render_literal(self, name: str, neg: bool) -> str:
        return ("!" if neg else "") + _RENDERERS[self](name)

_RENDERERS = {
    Dialect.PLAIN: lambda name: name,
    Dialect.DEFINED: lambda name: f"defined({name})",
}

# --- Literal / Term ---

class Lit(BaseModel):
    """A possibly negated feature variable."""
    model_config = ConfigDict(frozen=True)

    name: str
    neg: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not NAME_RE.match(v):
            raise ValueError(f"Invalid feature name '{v}'")
        return v

    def negated(self) -> "Lit":
        return Lit(name=self.name, neg=not self.neg)

class Term(BaseModel):
    """A conjunction of literals. The empty term is True."""
    model_config = ConfigDict(frozen=True)

    lits: Tuple[Lit, ...] = ()

    @field_validator('lits')
    @classmethod
    def dedupe(cls, v: Tuple[Lit, ...]) -> Tuple[Lit, ...]:
        return tuple(dict.fromkeys(v))

    def is_contradictory(self) -> bool:
        lits = set(self.lits)
        return any(lit.negated() in lits for lit in lits)

    def evaluate(self, assignment: Mapping[str, bool]) -> bool:
        return all(assignment.get(lit.name, False) != lit.neg for lit in self.lits)

    def render(self, dialect: Dialect) -> str:
        return " && ".join(dialect.render_literal(lit.name, lit.neg) for lit in self.lits)

# --- PresenceCondition ---

class PresenceCondition(BaseModel):
    """
    Immutable presence condition in disjunctive normal form.

    `terms` is a disjunction of conjunctive terms. One empty term means True,
    no terms at all means False. Contradictory and duplicate terms are dropped
    on construction, nothing beyond that is canonicalised.
    """
    model_config = ConfigDict(frozen=True)

    dialect: Dialect = Dialect.PLAIN
    terms: Tuple[Term, ...] = (Term(),)

    @field_validator('terms')
    @classmethod
    def normalize_terms(cls, v: Tuple[Term, ...]) -> Tuple[Term, ...]:
        kept = tuple(dict.fromkeys(t for t in v if not t.is_contradictory()))
        if any(not t.lits for t in kept):
            return (Term(),)
        return kept

    @classmethod
    def true(cls, dialect: Dialect = Dialect.PLAIN) -> "PresenceCondition":
        return cls(dialect=dialect, terms=(Term(),))

    @classmethod
    def false(cls, dialect: Dialect = Dialect.PLAIN) -> "PresenceCondition":
        return cls(dialect=dialect, terms=())

    @classmethod
    def from_terms(cls, terms: List[List[Union[str, Tuple[str, bool]]]],
                   dialect: Dialect = Dialect.PLAIN) -> "PresenceCondition":
        """
        Builds a condition from nested lists. A literal is either a name,
        optionally prefixed with '!', or a (name, neg) pair.
        """
        built = []
        for term in terms:
            lits = []
            for lit in term:
                if isinstance(lit, tuple):
                    lits.append(Lit(name=lit[0], neg=lit[1]))
                else:
                    lits.append(Lit(name=lit.lstrip("!"), neg=lit.startswith("!")))
            built.append(Term(lits=tuple(lits)))
        return cls(dialect=dialect, terms=tuple(built))

    def is_true(self) -> bool:
        return self.terms == (Term(),)

    def is_false(self) -> bool:
        return not self.terms

    def variables(self) -> FrozenSet[str]:
        return frozenset(lit.name for term in self.terms for lit in term.lits)

    def evaluate(self, assignment: Mapping[str, bool]) -> bool:
        """Evaluates the condition; variables missing from the assignment are deselected."""
        return any(term.evaluate(assignment) for term in self.terms)

    def compatible(self, other: "PresenceCondition") -> bool:
        """Whether both conditions range over the same variable universe."""
        return self.dialect == other.dialect

    def and_(self, other: "PresenceCondition") -> "PresenceCondition":
        """Conjunction by distributing both term lists over each other."""
        if not self.compatible(other):
            raise IncompatibleConditionError(
                f"Cannot conjoin {self.dialect.value} condition with {other.dialect.value} condition"
            )
        if self.is_true():
            return other
        if other.is_true():
            return self
        terms = tuple(Term(lits=a.lits + b.lits) for a, b in product(self.terms, other.terms))
        return PresenceCondition(dialect=self.dialect, terms=terms)

    def __and__(self, other: "PresenceCondition") -> "PresenceCondition":
        return self.and_(other)

    def to_configuration_space(self, dimacs_path: Union[str, Path], limit: int,
                               time_limit: TimeLimit = None,
                               solver_name: str = "glucose4") -> ConfigurationSpace:
        """
        Enumerates up to `limit` feature selections satisfying this condition
        under the feature model in `dimacs_path`, within a soft time budget.
        """
        return enumerate_configurations(self, dimacs_path, limit, time_limit, solver_name=solver_name)

    def __str__(self) -> str:
        if self.is_true():
            return "True"
        if self.is_false():
            return "False"
        if len(self.terms) == 1:
            return self.terms[0].render(self.dialect)
        return " || ".join(
            f"({t.render(self.dialect)})" if len(t.lits) > 1 else t.render(self.dialect)
            for t in self.terms
        )
