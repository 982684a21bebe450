import numpy as np
import pandas
import pytest
from restartpgm.parser import DataSource


@pytest.fixture
def data():
    rng = np.random.default_rng(0)
    n = 400
    a = rng.integers(0, 2, n)
    b = np.where(rng.random(n) < 0.1, 1 - a, a)
    c = rng.integers(0, 2, n)
    d = np.where(rng.random(n) < 0.05, 1 - (a ^ c), a ^ c)
    return pandas.DataFrame({'A': a, 'B': b, 'C': c, 'D': d})


@pytest.fixture
def data_source(data):
    return DataSource(data)


@pytest.fixture
def small_source():
    return DataSource(pandas.DataFrame({'X': [0, 1, 0], 'Y': [1, 1, 0], 'Z': [0, 0, 1]}))
