import logging
import numpy as np
import networkx as nx
from pgmpy.estimators import StructureEstimator
from restartpgm.external.K2Score import K2Score
from restartpgm.exceptions import InvalidConfiguration
from restartpgm.generator import RandomStructureGenerator
from restartpgm.helper import copy_parent_sets, network_score, markov_blanket_correction
from restartpgm.parser import DataSource
from restartpgm.structure import BayesianStructure, check_max_parents

logger = logging.getLogger(__name__)


class HillClimbSearch(StructureEstimator):
    def __init__(self, data_source, scoring_method=None, max_parents=2, use_arc_reversal=False,
                 score_type='BAYES', scores=None, **kwargs):
        """
        Class for heuristic hill climb searches for Bayesian network structures, to learn
        network structure from data. `optimize` climbs from a given structure to a structure
        with locally optimal score.

        Parameters
        ----------
        data_source: DataSource or pandas DataFrame object
            datafame object where each column represents one variable.

        scoring_method: object with a `local_score(variable, parents)` method (`K2Score` is used as default)
            Called with column names. This score is optimized during structure estimation.

        max_parents: int or None
            Maximum number of parents of every node. `None` lifts the limit.

        use_arc_reversal: bool
            Also consider reversing a single arc, on top of adding and deleting one.

        score_type: str
            Score type of the default `K2Score`, ignored when `scoring_method` is given.

        scores: dict (optional)
            Cache of local scores keyed by (node, sorted parents), shared between searches
            over the same data.
        """
        if not isinstance(data_source, DataSource):
            data_source = DataSource(data_source)
        self.data_source = data_source
        self.max_parents = check_max_parents(max_parents)
        self.use_arc_reversal = use_arc_reversal

        if scoring_method is not None:
            self.scoring_method = scoring_method
        else:
            self.scoring_method = K2Score(data_source.data_frame, score_type=score_type)

        self.scores = {} if scores is None else scores

        super(HillClimbSearch, self).__init__(data_source.data_frame, **kwargs)

    def _legal_operations(self, structure):
        """Generates the legal graph modifications for a given structure, together with
        their score changes. Possible graph modifications: (1) add, (2) remove, or
        (3) flip a single edge (only with `use_arc_reversal`). For details on scoring
        see Koller & Fridman, Probabilistic Graphical Models, Section 18.4.3.3 (page 818).
        Only modifications that keep the number of parents for each node at most
        `max_parents` and keep the graph acyclic are considered."""

        n_nodes = structure.n_nodes
        edges = structure.edges()

        for Y in range(n_nodes):  # (1) add single edge
            old_parents = structure.get_parents(Y)
            if structure.get_parent_set(Y).is_full() or \
                    (self.max_parents is not None and len(old_parents) >= self.max_parents):
                continue
            for X in range(n_nodes):
                if structure.add_arc_makes_sense(X, Y):
                    new_parents = old_parents + [X]
                    score_delta = self.get_local_score(Y, new_parents) - self.get_local_score(Y, old_parents)
                    yield (('+', (X, Y)), score_delta)

        for (X, Y) in edges:  # (2) remove single edge
            old_parents = structure.get_parents(Y)
            new_parents = old_parents[:]
            new_parents.remove(X)
            score_delta = self.get_local_score(Y, new_parents) - self.get_local_score(Y, old_parents)
            yield (('-', (X, Y)), score_delta)

        if not self.use_arc_reversal:
            return

        for (X, Y) in edges:  # (3) flip single edge
            new_edges = edges[:]
            new_edges.remove((X, Y))
            new_edges.append((Y, X))
            if nx.is_directed_acyclic_graph(nx.DiGraph(new_edges)):
                old_X_parents = structure.get_parents(X)
                old_Y_parents = structure.get_parents(Y)
                new_X_parents = old_X_parents + [Y]
                new_Y_parents = old_Y_parents[:]
                new_Y_parents.remove(X)
                if not structure.get_parent_set(X).is_full() and \
                        (self.max_parents is None or len(new_X_parents) <= self.max_parents):
                    score_delta = (self.get_local_score(X, new_X_parents) +
                                   self.get_local_score(Y, new_Y_parents) -
                                   self.get_local_score(X, old_X_parents) -
                                   self.get_local_score(Y, old_Y_parents))
                    yield (('flip', (X, Y)), score_delta)

    def optimize(self, structure):
        """
        Performs local hill climb search on `structure`, in place, applying the best
        single edge modification until no modification improves the score.

        Parameters
        ----------
        structure: BayesianStructure instance
            The starting point for the local search; holds a local score maximum on return.

        Returns
        -------
        structure: the same `BayesianStructure` instance
        """
        epsilon = 1e-8
        if structure.n_nodes != self.data_source.n_nodes:
            raise ValueError("'structure' should be a BayesianStructure with the same variables as the data set.")

        while True:
            best_score_delta = 0
            best_operation = None

            for operation, score_delta in self._legal_operations(structure):
                if score_delta > best_score_delta:
                    best_operation = operation
                    best_score_delta = score_delta

            if best_operation is None or best_score_delta < epsilon:
                break
            elif best_operation[0] == '+':
                X, Y = best_operation[1]
                structure.add_parent(Y, X)
            elif best_operation[0] == '-':
                X, Y = best_operation[1]
                structure.delete_parent(Y, X)
            elif best_operation[0] == 'flip':
                structure.reverse_arc(*best_operation[1])
            logger.debug('%s %s: %+.6f', best_operation[0], best_operation[1], best_score_delta)

        return structure

    def estimate(self, start=None):
        """
        Estimates a structure with a local score maximum, climbing from `start`
        (left untouched) or from the empty structure.
        """
        if start is None:
            structure = BayesianStructure(self.data_source, self.max_parents)
        else:
            structure = start.copy()
        return self.optimize(structure)

    def get_local_score(self, node, parents):
        parents = sorted(parents)
        key = (node, tuple(parents))
        # get score from cache
        if key in self.scores:
            return self.scores[key]
        # cache result for later use
        score = self.scoring_method.local_score(self.data_source.name(node),
                                                [self.data_source.name(parent) for parent in parents])
        self.scores[key] = score
        return score

    def score(self, structure):
        return network_score(structure, self.get_local_score)

    def clear_cache(self):
        self.scores.clear()


class RepeatedHillClimbSearch(HillClimbSearch):
    def __init__(self, data_source, runs=10, seed=1, init_as_naive_bayes=True, markov_blanket_correction=False,
                 **kwargs):
        """
        Repeatedly uses hill climbing starting with a randomly generated network structure
        and keeps the best structure of the various runs.

        Parameters
        ----------
        data_source: DataSource or pandas DataFrame object

        runs: int
            Number of times hill climbing is performed.

        seed: int
            Initialization value for the random number generator. Setting the seed
            allows replicability of experiments.

        init_as_naive_bayes: bool
            Random structures start from the class node as parent of every other node
            instead of from the empty structure.

        markov_blanket_correction: bool
            After the search, connect every node outside the Markov blanket of the class
            node to the class node.

        The remaining keyword arguments are passed to `HillClimbSearch`.
        """
        if isinstance(runs, bool) or not isinstance(runs, (int, np.integer)) or runs < 0:
            raise InvalidConfiguration('runs should be a non-negative integer, got {!r}.'.format(runs))
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise InvalidConfiguration('seed should be an integer, got {!r}.'.format(seed))
        self.runs = int(runs)
        self.seed = int(seed)
        self.init_as_naive_bayes = init_as_naive_bayes
        self.markov_blanket_correction = markov_blanket_correction

        super(RepeatedHillClimbSearch, self).__init__(data_source, **kwargs)
        self.generator = RandomStructureGenerator(self.max_parents, self.init_as_naive_bayes)

    def random_state(self):
        # numpy seeds must be non-negative
        return np.random.default_rng(self.seed & 0xFFFFFFFFFFFFFFFF)

    def search(self, structure):
        """
        Replaces the parent sets of `structure` with the best structure found over all runs.
        `structure` itself only changes once every run has finished, so a failing run
        leaves it as it was.
        """
        random_state = self.random_state()

        try:
            # starting best structure
            best_score = self.score(structure)
            best_structure = structure.copy()
            logger.debug('initial score: %.6f', best_score)

            # iterate random restarts
            for run in range(self.runs):
                current_structure = self.generator.new_structure(structure, random_state)

                # hill climb
                self.optimize(current_structure)
                current_score = self.score(current_structure)
                logger.debug('run %d: score %.6f', run + 1, current_score)

                # compare with the best structure
                if current_score > best_score:
                    logger.info('run %d improved the score from %.6f to %.6f', run + 1, best_score, current_score)
                    best_score = current_score
                    copy_parent_sets(best_structure, current_structure)

            # restore the best structure
            copy_parent_sets(structure, best_structure)
            if self.markov_blanket_correction:
                markov_blanket_correction(structure)
        finally:
            self.clear_cache()
        return structure

    def estimate(self, start=None):
        """
        Runs the repeated search from `start` (left untouched) or, by default, from the
        naive Bayes or empty structure, and returns the best structure found.
        """
        if start is None:
            structure = self.generator.initialize(BayesianStructure(self.data_source, self.max_parents))
        else:
            structure = start.copy()
        return self.search(structure)
