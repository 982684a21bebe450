import pandas
from restartpgm.exceptions import InvalidConfiguration


class DataSource(object):
    def __init__(self, data, class_variable=None):
        """
        Read-only view of the tabular data a network structure is learned from.
        Every column is one node of the network, numbered by its column position.

        :param data: pandas DataFrame, or the path of a .csv file
        :param class_variable: name of the class column; defaults to the last column
        """
        if isinstance(data, str):
            data = pandas.read_csv(data)

        self.data_frame = data
        self.variables = self.data_frame.columns.values.tolist()
        if len(self.variables) == 0:
            raise InvalidConfiguration('The data set has no columns.')

        # class node
        if class_variable is None:
            class_variable = self.variables[-1]
        elif class_variable not in self.variables:
            raise InvalidConfiguration("Class variable '{}' is not a column of the data set.".format(class_variable))
        self.class_variable = class_variable
        self.class_index = self.variables.index(class_variable)

    @property
    def n_nodes(self):
        return len(self.variables)

    def name(self, node):
        return self.variables[node]

    def index(self, variable):
        return self.variables.index(variable)

    def cardinality(self, node):
        return int(self.data_frame[self.variables[node]].nunique())
