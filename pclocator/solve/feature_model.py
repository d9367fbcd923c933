import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Union

from pclocator.cnf.cnf_io import read_dimacs
from pclocator.cnf.cnf_types import CnfDocument
from pclocator.core.errors import FeatureModelError
from pclocator.core.logging import get_logger

logger = get_logger(__name__)

class FeatureModel:
    """
    A DIMACS feature model with named features.

    Features are the variables named by DIMACS comments. A model without any
    name comments names every variable by its number instead; conditions over
    such a model are parsed with numeric_constants=False so that features 1
    and 0 are not read as True and False.
    """
    def __init__(self, doc: CnfDocument, source: str = "<memory>"):
        self.doc = doc
        self.source = source
        if doc.names:
            self.features: Dict[str, int] = {name: var for var, name in sorted(doc.names.items())}
        else:
            self.features = {str(var): var for var in range(1, doc.num_vars + 1)}

    @property
    def num_vars(self) -> int:
        return self.doc.num_vars

    @property
    def clauses(self) -> List[List[int]]:
        return self.doc.clauses

    def __contains__(self, name: str) -> bool:
        return name in self.features

    def __len__(self) -> int:
        return len(self.features)

    def __repr__(self) -> str:
        return f"FeatureModel({self.source!r}, features={len(self.features)}, clauses={len(self.doc.clauses)})"

@lru_cache(maxsize=8)
def _load_cached(path: str, mtime_ns: int, size: int) -> FeatureModel:
    logger.debug(f"Loading feature model {path}")
    return FeatureModel(read_dimacs(path), source=path)

def load_feature_model(path: Union[str, Path]) -> FeatureModel:
    """Loads a DIMACS feature model, reusing the parse while the file is unchanged."""
    resolved = Path(path).resolve()
    try:
        stat = os.stat(resolved)
    except OSError as e:
        raise FeatureModelError(f"Cannot read feature model {resolved}: {e}") from e
    return _load_cached(str(resolved), stat.st_mtime_ns, stat.st_size)
