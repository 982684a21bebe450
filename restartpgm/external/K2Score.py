#!/usr/bin/env python
import numpy as np
from scipy.special import gammaln
try:
    from pgmpy.structure_score import StructureScore
except ImportError:
    # pgmpy < 1.1
    from pgmpy.estimators import StructureScore
from restartpgm.exceptions import InvalidConfiguration

SCORE_TYPES = ('BAYES', 'BDEU', 'MDL', 'AIC', 'ENTROPY')


class K2Score(StructureScore):
    def __init__(self, data, score_type='BAYES', equivalent_sample_size=10, **kwargs):
        """
        Class for Bayesian structure scoring for BayesianModels with Dirichlet priors,
        and for the information theoretic scores derived from the log likelihood.
        The `local_score`-method measures how well a variable is described by a set of
        parents in the given data set; a network's score is the sum of its local scores.

        Parameters
        ----------
        data: pandas DataFrame object
            datafame object where each column represents one variable.

        score_type: str
            'BAYES' (K2, all Dirichlet pseudo counts set to 1), 'BDEU' (Dirichlet pseudo counts
            spread uniformly from `equivalent_sample_size`), 'MDL' (log likelihood with the BIC
            penalty), 'AIC' (log likelihood minus the number of free parameters) or
            'ENTROPY' (plain log likelihood).

        equivalent_sample_size: int
            Total pseudo count of the BDeu prior.

        state_names: dict (optional)
            A dict indicating, for each variable, the discrete set of states (or values)
            that the variable can take. If unspecified, the observed values in the data set
            are taken to be the only possible states.

        References
        ---------
        [1] Koller & Friedman, Probabilistic Graphical Models - Principles and Techniques, 2009
        Section 18.3.4-18.3.6 (esp. page 806)
        [2] AM Carvalho, Scoring functions for learning Bayesian networks,
        http://www.lx.it.pt/~asmc/pub/talks/09-TA/ta_pres.pdf
        """
        score_type = str(score_type).upper()
        if score_type not in SCORE_TYPES:
            raise InvalidConfiguration('Unknown score type {!r}, expected one of {}.'.format(score_type, SCORE_TYPES))
        self.score_type = score_type
        self.equivalent_sample_size = equivalent_sample_size
        super(K2Score, self).__init__(data, **kwargs)

    def local_score(self, variable, parents):
        if self.score_type == 'BAYES':
            return self.local_score_k2(variable, parents)
        elif self.score_type == 'BDEU':
            return self.local_score_bdeu(variable, parents)
        elif self.score_type == 'MDL':
            return self.local_score_bic(variable, parents)
        elif self.score_type == 'AIC':
            return self.local_score_aic(variable, parents)
        return self.local_score_mle(variable, parents)

    def counts(self, variable, parents):
        # rows: states of the variable, columns: parent configurations
        return np.asarray(self.state_counts(variable, list(parents)), dtype=float)

    def local_score_k2(self, variable, parents):
        """K2"""

        var_cardinality = len(self.state_names[variable])
        counts = self.counts(variable, parents)
        conditional_sample_sizes = counts.sum(axis=0)

        score = np.sum(gammaln(var_cardinality) - gammaln(conditional_sample_sizes + var_cardinality))
        score += np.sum(gammaln(counts + 1))
        return float(score)

    def local_score_mle(self, variable, parents):
        """MLE"""

        counts = self.counts(variable, parents)
        conditional_sample_sizes = np.broadcast_to(counts.sum(axis=0), counts.shape)

        observed = counts > 0
        score = np.sum(counts[observed] * (np.log(counts[observed]) - np.log(conditional_sample_sizes[observed])))
        return float(score)

    def local_score_bdeu(self, variable, parents):
        """BDeu"""

        var_cardinality = len(self.state_names[variable])
        counts = self.counts(variable, parents)
        num_parents_states = float(counts.shape[1])
        conditional_sample_sizes = counts.sum(axis=0)

        alpha = self.equivalent_sample_size / num_parents_states
        beta = self.equivalent_sample_size / (num_parents_states * var_cardinality)

        score = np.sum(gammaln(alpha) - gammaln(conditional_sample_sizes + alpha))
        score += np.sum(gammaln(counts + beta) - gammaln(beta))
        return float(score)

    def local_score_bic(self, variable, parents):
        """BIC"""

        var_cardinality = len(self.state_names[variable])
        num_parents_states = float(self.counts(variable, parents).shape[1])
        sample_size = len(self.data)

        score = self.local_score_mle(variable, parents)
        score -= 0.5 * np.log(sample_size) * num_parents_states * (var_cardinality - 1)
        return float(score)

    def local_score_aic(self, variable, parents):
        """AIC"""

        var_cardinality = len(self.state_names[variable])
        num_parents_states = float(self.counts(variable, parents).shape[1])

        return self.local_score_mle(variable, parents) - num_parents_states * (var_cardinality - 1)
