import numpy as np


def check_comparable(dest, source):
    if dest.n_nodes != source.n_nodes:
        raise ValueError('Structures over {} and {} nodes cannot be compared.'.format(dest.n_nodes, source.n_nodes))


def copy_parent_sets(dest, source):
    """
    Copies every parent set of `source` onto `dest`, replacing what `dest` held.
    :param dest: BayesianStructure to overwrite
    :param source: BayesianStructure over the same data source
    """
    check_comparable(dest, source)
    for node in range(source.n_nodes):
        dest.get_parent_set(node).copy(source.get_parent_set(node))


def same_structure(first, second):
    check_comparable(first, second)
    for node in range(first.n_nodes):
        if first.get_parents(node) != second.get_parents(node):
            return False
    return True


def network_score(structure, local_score):
    """
    Total score of a structure: the sum of the local scores of all nodes.
    :param structure: BayesianStructure
    :param local_score: callable (node index, list of parent indices) -> float
    """
    score = 0.
    for node in range(structure.n_nodes):
        score += local_score(node, structure.get_parents(node))
    return score


def ancestors(structure, node):
    """Nodes with a directed path to `node`, `node` included."""
    found = [node]
    old_size = 0
    while old_size != len(found):
        old_size = len(found)
        for current in found[:old_size]:
            for parent in structure.get_parents(current):
                if parent not in found:
                    found.append(parent)
    return set(found)


def markov_blanket_correction(structure, max_parent_configurations=1024):
    """
    Connects every node outside the Markov blanket of the class node to the class node.
    Ancestors of the class node become parents of the class node (while the number of
    parent configurations of the class node stays below `max_parent_configurations`),
    every other node gets the class node as a parent.
    The parent bound of the structure is not applied to these arcs.
    """
    data_source = structure.data_source
    class_index = data_source.class_index
    class_ancestors = ancestors(structure, class_index)

    for node in range(structure.n_nodes):
        in_markov_blanket = (node == class_index or
                             class_index in structure.get_parent_set(node) or
                             node in structure.get_parent_set(class_index))
        for child in range(structure.n_nodes):
            if in_markov_blanket:
                break
            in_markov_blanket = (node in structure.get_parent_set(child) and
                                 class_index in structure.get_parent_set(child))
        if in_markov_blanket:
            continue

        if node in class_ancestors:
            cardinalities = [data_source.cardinality(p) for p in structure.get_parents(class_index)]
            if np.prod(cardinalities, dtype=np.int64) < max_parent_configurations:
                structure.add_parent(class_index, node, bounded=False)
        else:
            structure.add_parent(node, class_index, bounded=False)
    return structure
