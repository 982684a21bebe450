import networkx as nx
from pgmpy.models import DiscreteBayesianNetwork
from restartpgm.exceptions import InvalidConfiguration, StructuralInvariantViolation


def check_max_parents(max_parents):
    if max_parents is None:
        return None
    if isinstance(max_parents, bool) or not isinstance(max_parents, int) or max_parents < 1:
        raise InvalidConfiguration('max_parents should be a positive integer or None, got {!r}.'.format(max_parents))
    return max_parents


class ParentSet(object):
    def __init__(self, node, max_parents=None):
        """
        Ordered parents of a single node. Parents are kept in insertion order.

        :param node: index of the node owning this parent set
        :param max_parents: maximum number of parents, None for no limit
        """
        self.node = node
        self.max_parents = max_parents
        self.parents = []

    def __len__(self):
        return len(self.parents)

    def __iter__(self):
        return iter(self.parents)

    def __contains__(self, parent):
        return parent in self.parents

    def __repr__(self):
        return 'ParentSet({}, {})'.format(self.node, self.parents)

    def is_full(self):
        return self.max_parents is not None and len(self.parents) >= self.max_parents

    def add_parent(self, parent, bounded=True):
        if parent == self.node:
            raise StructuralInvariantViolation('Node {} cannot be its own parent.'.format(self.node))
        if parent in self.parents:
            raise StructuralInvariantViolation('Node {} is already a parent of {}.'.format(parent, self.node))
        if bounded and self.is_full():
            raise StructuralInvariantViolation(
                'Node {} already has the maximum of {} parents.'.format(self.node, self.max_parents))
        self.parents.append(parent)

    def delete_parent(self, parent):
        self.parents.remove(parent)

    def delete_last_parent(self):
        return self.parents.pop()

    def copy(self, other):
        self.parents = list(other.parents)


class BayesianStructure(object):
    def __init__(self, data_source, max_parents=None):
        """
        Directed acyclic graph over the columns of a data source, stored as one
        parent set per node.

        :param data_source: DataSource the structure is built over
        :param max_parents: maximum number of parents per node, None for no limit
        """
        self.data_source = data_source
        self.max_parents = check_max_parents(max_parents)
        self.parent_sets = [ParentSet(node, self.max_parents) for node in range(data_source.n_nodes)]

    @classmethod
    def from_edges(cls, data_source, edges, max_parents=None):
        """Builds a structure from (parent, child) pairs of column names."""
        structure = cls(data_source, max_parents)
        for (X, Y) in edges:
            structure.add_parent(data_source.index(Y), data_source.index(X))
        return structure

    @property
    def n_nodes(self):
        return len(self.parent_sets)

    def get_parent_set(self, node):
        return self.parent_sets[node]

    def get_parents(self, node):
        return list(self.parent_sets[node].parents)

    def edges(self):
        return [(parent, node) for node in range(self.n_nodes) for parent in self.parent_sets[node]]

    def named_edges(self):
        return [(self.data_source.name(X), self.data_source.name(Y)) for (X, Y) in self.edges()]

    def to_digraph(self):
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.n_nodes))
        graph.add_edges_from(self.edges())
        return graph

    def is_acyclic(self):
        return nx.is_directed_acyclic_graph(self.to_digraph())

    def creates_cycle(self, tail, head):
        return not nx.is_directed_acyclic_graph(nx.DiGraph(self.edges() + [(tail, head)]))

    def add_arc_makes_sense(self, tail, head):
        if tail == head or tail in self.parent_sets[head]:
            return False
        return not self.creates_cycle(tail, head)

    def add_parent(self, node, parent, bounded=True):
        if parent != node and self.creates_cycle(parent, node):
            raise StructuralInvariantViolation('Arc {} -> {} would create a cycle.'.format(parent, node))
        self.parent_sets[node].add_parent(parent, bounded=bounded)

    def delete_parent(self, node, parent):
        self.parent_sets[node].delete_parent(parent)

    def reverse_arc(self, tail, head):
        self.parent_sets[head].delete_parent(tail)
        try:
            self.add_parent(tail, head)
        except StructuralInvariantViolation:
            self.parent_sets[head].add_parent(tail, bounded=False)
            raise

    def clear(self):
        for parent_set in self.parent_sets:
            while len(parent_set) > 0:
                parent_set.delete_last_parent()

    def empty_copy(self):
        return BayesianStructure(self.data_source, self.max_parents)

    def copy(self):
        structure = self.empty_copy()
        for node in range(self.n_nodes):
            structure.parent_sets[node].copy(self.parent_sets[node])
        return structure

    def to_model(self):
        model = DiscreteBayesianNetwork(self.named_edges())
        model.add_nodes_from(self.data_source.variables)
        return model

    def __repr__(self):
        return 'BayesianStructure({})'.format([parent_set.parents for parent_set in self.parent_sets])
