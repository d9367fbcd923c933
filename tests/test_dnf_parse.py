import itertools
import pytest
from hypothesis import given, strategies as st

from pclocator.core.errors import MalformedConditionError
from pclocator.pc import Dialect, Implementation, KMAX_MULTI, KMAX_PLAIN, PresenceCondition, parse_dnf

NAMES = ["A", "B", "C", "D"]

@st.composite
def condition_strategy(draw, dialect=Dialect.PLAIN):
    terms = draw(st.lists(
        st.lists(st.tuples(st.sampled_from(NAMES), st.booleans()), min_size=0, max_size=3),
        min_size=0, max_size=3
    ))
    return PresenceCondition.from_terms(terms, dialect=dialect)

def assignments():
    for values in itertools.product([False, True], repeat=len(NAMES)):
        yield dict(zip(NAMES, values))

def test_parse_simple_conjunction():
    pc = parse_dnf("A&&B")
    assert str(pc) == "A && B"
    assert pc.variables() == {"A", "B"}

def test_parse_disjunction_with_negation():
    pc = parse_dnf("A && !B || ~C")
    assert str(pc) == "(A && !B) || !C"

def test_parse_single_operators_and_parentheses():
    pc = parse_dnf("(A & B) | (C)")
    assert str(pc) == "(A && B) || C"

def test_parse_defined_atoms():
    pc = parse_dnf("defined(CONFIG_A) && !definedEx(CONFIG_B) || defined CONFIG_C", Dialect.DEFINED)
    assert str(pc) == "(defined(CONFIG_A) && !defined(CONFIG_B)) || defined(CONFIG_C)"

def test_parse_constants():
    assert parse_dnf("1").is_true()
    assert parse_dnf("True && A").terms == parse_dnf("A").terms
    assert parse_dnf("0").is_false()
    assert str(parse_dnf("A && 0 || B")) == "B"
    assert parse_dnf("!0").is_true()

def test_numeric_atoms_as_feature_names():
    pc = parse_dnf("1 || 0 && false", numeric_constants=False)
    assert str(pc) == "1"
    numbered = Implementation("numbered", [Dialect.PLAIN], numeric_constants=False)
    assert numbered.from_dnf("!1")[0].terms == parse_dnf("!1", numeric_constants=False).terms
    assert KMAX_PLAIN.from_dnf("1")[0].is_true()

def test_blank_text_is_true():
    assert parse_dnf("   ").is_true()

@pytest.mark.parametrize("text", ["A &&", "|| A", "A && (B", "A B", "A && !", "A + B"])
def test_malformed_text_rejected(text):
    with pytest.raises(MalformedConditionError):
        parse_dnf(text)

def test_implementation_blank_text_yields_nothing():
    assert KMAX_PLAIN.from_dnf("") == []
    assert KMAX_MULTI.from_dnf("  ") == []

def test_implementation_multiplexes_dialects():
    pcs = KMAX_MULTI.from_dnf("A && !B")
    assert [pc.dialect for pc in pcs] == [Dialect.PLAIN, Dialect.DEFINED]
    assert str(pcs[0]) == "A && !B"
    assert str(pcs[1]) == "defined(A) && !defined(B)"
    assert pcs[0].terms == pcs[1].terms

def test_implementation_requires_dialect():
    with pytest.raises(ValueError):
        Implementation("none", [])

@given(pc=condition_strategy())
def test_render_parse_preserves_semantics(pc):
    parsed = parse_dnf(str(pc))
    for assignment in assignments():
        assert parsed.evaluate(assignment) == pc.evaluate(assignment)

@given(pc=condition_strategy(dialect=Dialect.DEFINED))
def test_render_parse_preserves_semantics_defined(pc):
    parsed = parse_dnf(str(pc), Dialect.DEFINED)
    assert parsed.dialect == Dialect.DEFINED
    for assignment in assignments():
        assert parsed.evaluate(assignment) == pc.evaluate(assignment)
