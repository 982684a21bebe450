import logging
from restartpgm.structure import BayesianStructure, check_max_parents

logger = logging.getLogger(__name__)


class RandomStructureGenerator(object):
    def __init__(self, max_parents=2, init_as_naive_bayes=True):
        """
        Generates random, valid starting structures for the repeated hill climber.
        :param max_parents: maximum number of parents per node, None for no limit
        :param init_as_naive_bayes: start from the class node as parent of every other node
            instead of from the empty graph
        """
        self.max_parents = check_max_parents(max_parents)
        self.init_as_naive_bayes = init_as_naive_bayes

    def initialize(self, structure):
        # clear network
        structure.clear()

        # naive Bayes: arrow from the class node to each of the other nodes
        if self.init_as_naive_bayes:
            class_index = structure.data_source.class_index
            for node in range(structure.n_nodes):
                if node != class_index:
                    structure.add_parent(node, class_index)
        return structure

    def add_random_arcs(self, structure, random_state):
        n_nodes = structure.n_nodes
        n_attempts = int(random_state.integers(0, n_nodes * n_nodes))
        n_added = 0
        for i in range(n_attempts):
            tail = int(random_state.integers(0, n_nodes))
            head = int(random_state.integers(0, n_nodes))
            parent_set = structure.get_parent_set(head)
            if parent_set.is_full() or (self.max_parents is not None and len(parent_set) >= self.max_parents):
                continue
            if structure.add_arc_makes_sense(tail, head):
                structure.add_parent(head, tail)
                n_added += 1
        logger.debug('inserted %d random arcs in %d attempts', n_added, n_attempts)
        return structure

    def generate(self, structure, random_state):
        """
        Overwrites `structure` with a new random structure.
        :param structure: BayesianStructure, mutated in place
        :param random_state: numpy.random.Generator shared by all runs of a search
        """
        self.initialize(structure)
        return self.add_random_arcs(structure, random_state)

    def new_structure(self, template, random_state):
        structure = BayesianStructure(template.data_source, self.max_parents)
        return self.generate(structure, random_state)
