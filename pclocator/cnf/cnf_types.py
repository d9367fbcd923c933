from typing import Dict, List
from pydantic import BaseModel, Field, field_validator

class CnfDocument(BaseModel):
    """CNF document with optional variable names taken from DIMACS comments."""
    num_vars: int = Field(ge=0)
    clauses: List[List[int]]
    names: Dict[int, str] = Field(default_factory=dict)

    @field_validator('clauses')
    @classmethod
    def validate_clauses(cls, v: List[List[int]], info) -> List[List[int]]:
        num_vars = info.data.get('num_vars')
        for i, clause in enumerate(v):
            if not clause:
                raise ValueError(f"Clause {i} is empty")
            for lit in clause:
                if lit == 0:
                    raise ValueError(f"Literal 0 is invalid in clause {i}")
                if num_vars is not None and abs(lit) > num_vars:
                    raise ValueError(f"Literal {lit} exceeds num_vars {num_vars} in clause {i}")
        return v

    @field_validator('names')
    @classmethod
    def validate_names(cls, v: Dict[int, str], info) -> Dict[int, str]:
        num_vars = info.data.get('num_vars')
        for var in v:
            if var <= 0 or (num_vars is not None and var > num_vars):
                raise ValueError(f"Named variable {var} outside 1..{num_vars}")
        return v
