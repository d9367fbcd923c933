import re
from typing import Iterable, List, Optional, Tuple

from pclocator.core.errors import MalformedConditionError
from pclocator.pc.pc_types import Dialect, Lit, PresenceCondition, Term

OR_RE = re.compile(r"\|\|?")
AND_RE = re.compile(r"&&?")

# Atom spellings accepted on input, regardless of the target dialect
ATOM_PATTERNS = [
    re.compile(r"^definedEx\s*\(\s*(?P<name>[A-Za-z0-9_]+)\s*\)$"),
    re.compile(r"^defined\s*\(\s*(?P<name>[A-Za-z0-9_]+)\s*\)$"),
    re.compile(r"^defined\s+(?P<name>[A-Za-z0-9_]+)$"),
    re.compile(r"^(?P<name>[A-Za-z0-9_]+)$"),
]

TRUE_ATOMS = {"True", "true"}
FALSE_ATOMS = {"False", "false"}
# "1" and "0" also name features of DIMACS models without name comments,
# so they are constants only unless numeric_constants is switched off
NUMERIC_TRUE = "1"
NUMERIC_FALSE = "0"

def _unwrap(text: str) -> str:
    """Strips one pair of enclosing parentheses, if they enclose the whole text."""
    text = text.strip()
    if not (text.startswith("(") and text.endswith(")")):
        return text
    depth = 0
    for i, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0 and i != len(text) - 1:
                return text
    return text[1:-1].strip()

def _parse_literal(text: str, source: str, numeric_constants: bool = True) -> Optional[Lit]:
    """
    Parses one literal. Returns None for the constant True and raises
    _FalseTerm for the constant False.
    """
    atom = _unwrap(text)
    neg = False
    while atom[:1] in ("!", "~"):
        neg = not neg
        atom = _unwrap(atom[1:])
    if not atom:
        raise MalformedConditionError(f"Empty literal in condition '{source}'")

    true_atoms = TRUE_ATOMS | {NUMERIC_TRUE} if numeric_constants else TRUE_ATOMS
    false_atoms = FALSE_ATOMS | {NUMERIC_FALSE} if numeric_constants else FALSE_ATOMS
    if atom in true_atoms or atom in false_atoms:
        if (atom in true_atoms) != neg:
            return None
        raise _FalseTerm()

    for pattern in ATOM_PATTERNS:
        match = pattern.match(atom)
        if match:
            return Lit(name=match.group("name"), neg=neg)
    raise MalformedConditionError(f"Unrecognised literal '{text.strip()}' in condition '{source}'")

class _FalseTerm(Exception):
    pass

def parse_terms(text: str, numeric_constants: bool = True) -> Tuple[Term, ...]:
    """
    Parses raw DNF text into terms. Blank text is True. With
    numeric_constants off, "1" and "0" are feature names rather than True
    and False, as needed for DIMACS models whose features are numbered.
    """
    source = text.strip()
    if not source:
        return (Term(),)
    terms = []
    for raw_term in OR_RE.split(_unwrap(source)):
        raw_term = _unwrap(raw_term)
        if not raw_term:
            raise MalformedConditionError(f"Empty term in condition '{source}'")
        lits = []
        try:
            for raw_lit in AND_RE.split(raw_term):
                lit = _parse_literal(raw_lit, source, numeric_constants)
                if lit is not None:
                    lits.append(lit)
        except _FalseTerm:
            continue
        terms.append(Term(lits=tuple(lits)))
    return tuple(terms)

def parse_dnf(text: str, dialect: Dialect = Dialect.PLAIN,
              numeric_constants: bool = True) -> PresenceCondition:
    """Parses raw DNF text such as 'A && !B || C' into a presence condition."""
    return PresenceCondition(dialect=dialect, terms=parse_terms(text, numeric_constants))

class Implementation:
    """
    Pluggable DNF parser. A single raw DNF string is turned into one presence
    condition per configured dialect, so tools reading different dialects can
    all pick up a build-system condition.
    """
    def __init__(self, name: str, dialects: Iterable[Dialect], numeric_constants: bool = True):
        self.name = name
        self.dialects = list(dialects)
        self.numeric_constants = numeric_constants
        if not self.dialects:
            raise ValueError("Implementation requires at least one dialect")

    def from_dnf(self, text: str) -> List[PresenceCondition]:
        """
        Returns no conditions for blank text (the entry holds unconditionally),
        otherwise one condition per dialect in configuration order.
        """
        if not text.strip():
            return []
        terms = parse_terms(text, self.numeric_constants)
        return [PresenceCondition(dialect=d, terms=terms) for d in self.dialects]

    def __repr__(self) -> str:
        return f"Implementation({self.name!r}, {[d.value for d in self.dialects]})"

KMAX_PLAIN = Implementation("kmax", [Dialect.PLAIN])
KMAX_MULTI = Implementation("kmax-multi", [Dialect.PLAIN, Dialect.DEFINED])
