import pandas
import pytest
from restartpgm.exceptions import InvalidConfiguration, StructuralInvariantViolation
from restartpgm.helper import copy_parent_sets, same_structure
from restartpgm.parser import DataSource
from restartpgm.structure import BayesianStructure, ParentSet, check_max_parents


def test_data_source_class_defaults_to_last_column(data_source):
    assert data_source.n_nodes == 4
    assert data_source.class_variable == 'D'
    assert data_source.class_index == 3


def test_data_source_from_csv(tmp_path, data):
    file_name = str(tmp_path / 'data.csv')
    data.to_csv(file_name, index=False)
    source = DataSource(file_name, class_variable='B')
    assert source.variables == ['A', 'B', 'C', 'D']
    assert source.class_index == 1
    assert source.cardinality(0) == 2


def test_data_source_unknown_class():
    with pytest.raises(InvalidConfiguration):
        DataSource(pandas.DataFrame({'A': [0, 1]}), class_variable='B')


def test_check_max_parents():
    assert check_max_parents(None) is None
    assert check_max_parents(3) == 3
    for value in (0, -1, 1.5, True):
        with pytest.raises(InvalidConfiguration):
            check_max_parents(value)


def test_parent_set_rejects_self_duplicates_and_overflow():
    parent_set = ParentSet(0, max_parents=2)
    with pytest.raises(StructuralInvariantViolation):
        parent_set.add_parent(0)
    parent_set.add_parent(1)
    with pytest.raises(StructuralInvariantViolation):
        parent_set.add_parent(1)
    parent_set.add_parent(2)
    with pytest.raises(StructuralInvariantViolation):
        parent_set.add_parent(3)
    assert parent_set.parents == [1, 2]
    assert parent_set.delete_last_parent() == 2
    assert parent_set.parents == [1]


def test_cycle_is_refused_before_insertion(small_source):
    structure = BayesianStructure(small_source)
    structure.add_parent(1, 0)
    structure.add_parent(2, 1)
    assert structure.creates_cycle(2, 0)
    assert not structure.add_arc_makes_sense(2, 0)
    with pytest.raises(StructuralInvariantViolation):
        structure.add_parent(0, 2)
    assert structure.edges() == [(0, 1), (1, 2)]
    assert structure.is_acyclic()


def test_reverse_arc(small_source):
    structure = BayesianStructure(small_source)
    structure.add_parent(1, 0)
    structure.reverse_arc(0, 1)
    assert structure.get_parents(0) == [1]
    assert structure.get_parents(1) == []


def test_reverse_arc_closing_a_cycle_is_undone(small_source):
    structure = BayesianStructure(small_source)
    structure.add_parent(1, 0)
    structure.add_parent(2, 1)
    structure.add_parent(2, 0)
    with pytest.raises(StructuralInvariantViolation):
        structure.reverse_arc(0, 2)
    assert structure.get_parents(2) == [1, 0]
    assert structure.get_parents(0) == []


def test_from_edges_and_named_edges(small_source):
    structure = BayesianStructure.from_edges(small_source, [('X', 'Z'), ('Y', 'Z')])
    assert structure.get_parents(2) == [0, 1]
    assert structure.named_edges() == [('X', 'Z'), ('Y', 'Z')]
    assert set(structure.to_digraph().nodes) == {0, 1, 2}


def test_to_model_keeps_isolated_nodes(small_source):
    structure = BayesianStructure.from_edges(small_source, [('X', 'Y')])
    model = structure.to_model()
    assert set(model.nodes()) == {'X', 'Y', 'Z'}
    assert set(model.edges()) == {('X', 'Y')}


def test_copy_is_independent(small_source):
    source = BayesianStructure.from_edges(small_source, [('Y', 'X'), ('Z', 'X')])
    copy = source.copy()
    assert same_structure(copy, source)
    assert copy.get_parents(0) == [1, 2]

    source.delete_parent(0, 1)
    source.add_parent(1, 2)
    assert copy.get_parents(0) == [1, 2]
    assert copy.get_parents(1) == []
    assert not same_structure(copy, source)


def test_copy_parent_sets_overwrites_destination(small_source):
    source = BayesianStructure.from_edges(small_source, [('X', 'Y')])
    dest = BayesianStructure.from_edges(small_source, [('Z', 'X'), ('Z', 'Y')])
    copy_parent_sets(dest, source)
    assert [dest.get_parents(node) for node in range(3)] == [[], [0], []]

    source.add_parent(2, 1)
    assert dest.get_parents(2) == []


def test_copy_parent_sets_needs_same_node_count(small_source, data_source):
    with pytest.raises(ValueError):
        copy_parent_sets(BayesianStructure(small_source), BayesianStructure(data_source))


def test_clear(small_source):
    structure = BayesianStructure.from_edges(small_source, [('X', 'Y'), ('Z', 'Y')])
    structure.clear()
    assert structure.edges() == []
