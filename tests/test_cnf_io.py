import pytest
from pclocator.cnf import CnfDocument, read_dimacs, read_dimacs_from_string
from pclocator.core.errors import FeatureModelError

def test_dimacs_simple():
    doc = read_dimacs_from_string("p cnf 2 1\n1 2 0")
    assert doc.num_vars == 2
    assert doc.clauses == [[1, 2]]
    assert doc.names == {}

def test_dimacs_feature_names():
    dimacs = """
    c 1 CONFIG_A
    c 2$ CONFIG_B
    c generated by kconfigreader
    p cnf 3 1
    -1 2 0
    """
    doc = read_dimacs_from_string(dimacs)
    assert doc.names == {1: "CONFIG_A", 2: "CONFIG_B"}
    assert doc.num_vars == 3

def test_dimacs_clause_spanning_lines():
    doc = read_dimacs_from_string("p cnf 3 1\n1 -2\n3 0")
    assert doc.clauses == [[1, -2, 3]]

def test_dimacs_multi_clause_per_line():
    doc = read_dimacs_from_string("p cnf 3 2\n1 2 0 2 3 0")
    assert doc.clauses == [[1, 2], [2, 3]]

def test_dimacs_no_header_infer_vars():
    doc = read_dimacs_from_string("1 -2 3 0\n-3 4 0")
    assert doc.num_vars == 4

def test_dimacs_missing_zero():
    with pytest.raises(FeatureModelError, match="Missing terminating 0"):
        read_dimacs_from_string("p cnf 2 1\n1 2")

def test_dimacs_empty_clause_error():
    with pytest.raises(FeatureModelError, match="Empty clause"):
        read_dimacs_from_string("p cnf 1 1\n0")

def test_dimacs_bad_header():
    with pytest.raises(FeatureModelError, match="Invalid DIMACS header"):
        read_dimacs_from_string("p dnf 1 1\n1 0")

def test_dimacs_bad_literal():
    with pytest.raises(FeatureModelError, match="Invalid literal"):
        read_dimacs_from_string("p cnf 1 1\nx 0")

def test_missing_file(tmp_path):
    with pytest.raises(FeatureModelError, match="Cannot read feature model"):
        read_dimacs(tmp_path / "missing.dimacs")

def test_read_named_model_from_file(tmp_path):
    path = tmp_path / "model.dimacs"
    path.write_text("c 1 A\nc 2 B\nc 3 C\np cnf 3 2\n1 -2 0\n3 0\n")
    doc = read_dimacs(path)
    assert doc.names == {1: "A", 2: "B", 3: "C"}
    assert doc.clauses == [[1, -2], [3]]

def test_names_outside_variable_range_rejected():
    with pytest.raises(ValueError):
        CnfDocument(num_vars=1, clauses=[[1]], names={2: "B"})
