import pytest

from cpusim.process import make_processes


@pytest.fixture
def fcfs_set():
    return make_processes([(0, 5), (1, 3), (2, 8)])


@pytest.fixture
def gap_set():
    return make_processes([(0, 2), (5, 2)])
