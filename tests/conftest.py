# Ensure 'src' is on sys.path for imports like `from fecore.geometry import ...`
import os
import sys

import pytest

_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

import fecore.config as config  # noqa: E402
from fecore.geometry import NodeSet  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_contracts():
    enabled = config.CONTRACTS_ENABLED
    config.set_contracts_enabled(True)
    yield
    config.set_contracts_enabled(enabled)


@pytest.fixture
def strip_nodes() -> NodeSet:
    """
    Two unit quads side by side:

        3 - 4 - 5
        |   |   |
        0 - 1 - 2
    """
    return NodeSet([
        [0.0, 0.0],
        [1.0, 0.0],
        [2.0, 0.0],
        [0.0, 1.0],
        [1.0, 1.0],
        [2.0, 1.0],
    ])


@pytest.fixture
def unit_cube_nodes() -> NodeSet:
    return NodeSet([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0],
        [0.0, 1.0, 1.0],
    ])
