import itertools
import pytest
from hypothesis import given, strategies as st

from pclocator.core.errors import IncompatibleConditionError
from pclocator.pc import Dialect, PresenceCondition

NAMES = ["A", "B", "C", "D"]

@st.composite
def condition_strategy(draw, dialect=Dialect.PLAIN):
    terms = draw(st.lists(
        st.lists(st.tuples(st.sampled_from(NAMES), st.booleans()), min_size=0, max_size=3),
        min_size=0, max_size=3
    ))
    return PresenceCondition.from_terms(terms, dialect=dialect)

def all_assignments():
    for values in itertools.product([False, True], repeat=len(NAMES)):
        yield dict(zip(NAMES, values))

def test_true_and_false():
    assert PresenceCondition.true().is_true()
    assert PresenceCondition.false().is_false()
    assert str(PresenceCondition.true()) == "True"
    assert str(PresenceCondition.false()) == "False"

def test_contradictory_terms_dropped():
    pc = PresenceCondition.from_terms([["A", "!A"], ["B"]])
    assert len(pc.terms) == 1
    assert str(pc) == "B"

def test_empty_term_collapses_to_true():
    pc = PresenceCondition.from_terms([["A"], []])
    assert pc.is_true()

def test_duplicates_removed():
    pc = PresenceCondition.from_terms([["A", "A", "B"], ["A", "B"]])
    assert str(pc) == "A && B"

def test_rendering_per_dialect():
    terms = [["A", "!B"], ["C"]]
    assert str(PresenceCondition.from_terms(terms)) == "(A && !B) || C"
    assert str(PresenceCondition.from_terms(terms, dialect=Dialect.DEFINED)) == \
        "(defined(A) && !defined(B)) || defined(C)"

def test_conjunction_distributes():
    a = PresenceCondition.from_terms([["A"], ["B"]])
    b = PresenceCondition.from_terms([["C"]])
    assert str(a & b) == "(A && C) || (B && C)"

def test_conjunction_with_true_is_identity():
    a = PresenceCondition.from_terms([["A", "!B"]])
    assert a.and_(PresenceCondition.true()) == a
    assert PresenceCondition.true().and_(a) == a

def test_conjunction_with_false_is_false():
    a = PresenceCondition.from_terms([["A"]])
    assert a.and_(PresenceCondition.false()).is_false()

def test_compatibility_by_dialect():
    plain = PresenceCondition.from_terms([["A"]])
    defined = PresenceCondition.from_terms([["A"]], dialect=Dialect.DEFINED)
    assert plain.compatible(PresenceCondition.true())
    assert not plain.compatible(defined)
    with pytest.raises(IncompatibleConditionError):
        plain.and_(defined)

def test_conditions_are_immutable_and_hashable():
    pc = PresenceCondition.from_terms([["A"]])
    with pytest.raises(Exception):
        pc.dialect = Dialect.DEFINED
    assert len({pc, PresenceCondition.from_terms([["A"]])}) == 1

def test_evaluate_missing_variable_is_deselected():
    pc = PresenceCondition.from_terms([["!A"]])
    assert pc.evaluate({})
    assert not pc.evaluate({"A": True})

def test_invalid_feature_name_rejected():
    with pytest.raises(ValueError):
        PresenceCondition.from_terms([["A B"]])

@given(a=condition_strategy(), b=condition_strategy())
def test_conjunction_semantics(a, b):
    conj = a & b
    for assignment in all_assignments():
        assert conj.evaluate(assignment) == (a.evaluate(assignment) and b.evaluate(assignment))

@given(a=condition_strategy(), b=condition_strategy(), c=condition_strategy())
def test_conjunction_commutative_and_associative(a, b, c):
    for assignment in all_assignments():
        assert (a & b).evaluate(assignment) == (b & a).evaluate(assignment)
        assert ((a & b) & c).evaluate(assignment) == (a & (b & c)).evaluate(assignment)
