from pgmpy.estimators import BayesianEstimator
from restartpgm.external.HillClimbSearch import RepeatedHillClimbSearch
from restartpgm.parser import DataSource


class SimpleBayesianEstimator(object):
    def __init__(self, data, class_variable=None, runs=10, seed=1, max_parents=2, init_as_naive_bayes=True,
                 use_arc_reversal=False, score_type='BAYES', markov_blanket_correction=False,
                 equivalent_sample_size=1):
        """
        Learns a Bayesian network from a single data set: structure by repeated hill climbing,
        parameters by Bayesian estimation with a BDeu prior.
        :param data: pandas DataFrame or path to a .csv file
        :param class_variable: name of the class column, defaults to the last column
        :param equivalent_sample_size: equivalent sample size of the BDeu prior used for the CPDs
        The remaining parameters configure `RepeatedHillClimbSearch`.
        """
        self.data_source = DataSource(data, class_variable=class_variable)
        self.search = RepeatedHillClimbSearch(self.data_source,
                                              runs=runs,
                                              seed=seed,
                                              max_parents=max_parents,
                                              init_as_naive_bayes=init_as_naive_bayes,
                                              use_arc_reversal=use_arc_reversal,
                                              score_type=score_type,
                                              markov_blanket_correction=markov_blanket_correction)
        self.structure = self.search.estimate()
        self.model = self.structure.to_model()
        cpds = BayesianEstimator(self.model, self.data_source.data_frame).get_parameters(
            prior_type='BDeu', equivalent_sample_size=equivalent_sample_size)
        self.model.add_cpds(*cpds)

    def get_model(self):
        return self.model

    def get_structure(self):
        return self.structure

    def print_edges(self):
        print(self.model.edges)

    def print_cpds(self):
        for cpd in self.model.get_cpds():
            print("CPD of {variable}:".format(variable=cpd.variable))
            print(cpd)
