import re
from pathlib import Path
from typing import Dict, List, Union

from pclocator.cnf.cnf_types import CnfDocument
from pclocator.core.errors import FeatureModelError

# FeatureIDE and kconfigreader name variables in comments: "c 12 CONFIG_FOO",
# helper variables of non-Boolean options carry a '$' after the id.
NAME_COMMENT_RE = re.compile(r"^c\s+(\d+)\$?\s+(\S+)\s*$")

def read_dimacs_from_string(text: str) -> CnfDocument:
    """
    Parses DIMACS text. Clauses may span lines or share a line, the header
    is optional and a header that undercounts variables is corrected.
    """
    header_vars = 0
    names: Dict[int, str] = {}
    clauses: List[List[int]] = []
    current: List[int] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("%"):
            continue
        if line.startswith("c"):
            match = NAME_COMMENT_RE.match(line)
            if match:
                names[int(match.group(1))] = match.group(2)
            continue
        if line.startswith("p"):
            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise FeatureModelError(f"Invalid DIMACS header at line {lineno}: '{line}'")
            try:
                header_vars = int(parts[2])
            except ValueError as e:
                raise FeatureModelError(f"Invalid DIMACS header at line {lineno}: '{line}'") from e
            continue

        for token in line.split():
            try:
                lit = int(token)
            except ValueError as e:
                raise FeatureModelError(f"Invalid literal '{token}' at line {lineno}") from e
            if lit == 0:
                if not current:
                    raise FeatureModelError(f"Empty clause at line {lineno}")
                clauses.append(current)
                current = []
            else:
                current.append(lit)

    if current:
        raise FeatureModelError("Missing terminating 0 for last clause")

    max_var = max((abs(l) for c in clauses for l in c), default=0)
    max_var = max(max_var, max(names, default=0))
    try:
        return CnfDocument(num_vars=max(header_vars, max_var), clauses=clauses, names=names)
    except ValueError as e:
        raise FeatureModelError(f"Invalid CNF structure: {e}") from e

def read_dimacs(path: Union[str, Path]) -> CnfDocument:
    """Reads a DIMACS file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FeatureModelError(f"Cannot read feature model {path}: {e}") from e
    return read_dimacs_from_string(text)
