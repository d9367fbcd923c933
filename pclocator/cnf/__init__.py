from pclocator.cnf.cnf_types import CnfDocument
from pclocator.cnf.cnf_io import read_dimacs, read_dimacs_from_string

__all__ = ["CnfDocument", "read_dimacs", "read_dimacs_from_string"]
