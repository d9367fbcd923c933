from pclocator.pc.pc_types import Dialect, Lit, Term, PresenceCondition
from pclocator.pc.dnf_parse import Implementation, parse_dnf, parse_terms, KMAX_PLAIN, KMAX_MULTI

__all__ = [
    "Dialect", "Lit", "Term", "PresenceCondition",
    "Implementation", "parse_dnf", "parse_terms", "KMAX_PLAIN", "KMAX_MULTI"
]
