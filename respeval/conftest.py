"""
respeval's testing configuration file.
"""
import numpy as np
import pytest


# --- respeval fixtures


@pytest.fixture(scope='class')
def ignore_numpy_errors():
    """
    Ignore numpy errors for marked tests.
    """
    nperr = np.geterr()
    np.seterr(all='ignore')
    yield
    np.seterr(**nperr)


# --- Pytest configuration


def pytest_configure(config):
    """
    Configure pytest with custom logic for respeval before test run.
    """
    # Set numpy print options to try to not break doctests.
    np.set_printoptions(legacy='1.13')
