import io
import logging

import numpy as np
import pytest

import fecore.config as config
from fecore.contracts import ensure_matrix, ensure_param_coords, ensure_vector
from fecore.exceptions import ContractError, FecoreError
from fecore.logging_config import LOG_LEVEL_ENV, resolve_level, setup_logging
from fecore.utils import inflate_bounds, is_xyz_inside_box, rotate_left, skew_matrix


@pytest.mark.parametrize("value, expected", [
    (None, True),
    ("1", True),
    ("yes", True),
    ("0", False),
    ("false", False),
    (" OFF ", False),
    ("No", False),
])
def test_contracts_enabled_from_env(value, expected):
    assert config.contracts_enabled_from_env(value) is expected


def test_constants():
    assert config.AXISYMMETRIC_FACTOR == pytest.approx(2 * np.pi)
    assert config.DEFAULT_OTHER_DIMENSION == 1.0


def test_contract_checks():
    with pytest.raises(ContractError):
        ensure_matrix([1.0, 2.0])
    with pytest.raises(ContractError):
        ensure_matrix(np.ones((2, 3)), rows=3)
    with pytest.raises(ContractError):
        ensure_vector(np.ones((2, 2)))
    with pytest.raises(ContractError):
        ensure_vector([1.0, 2.0], length=3)
    with pytest.raises(ContractError):
        ensure_matrix([["a", "b"]])
    with pytest.raises(ContractError):
        ensure_param_coords([0.0], 2, "Q4")
    assert issubclass(ContractError, FecoreError)


def test_contracts_can_be_disabled():
    config.set_contracts_enabled(False)
    assert ensure_matrix([1.0, 2.0]).shape == (2,)
    assert ensure_vector(np.ones((2, 2))).shape == (2, 2)
    np.testing.assert_array_equal(ensure_param_coords(0.5, 1, "L2"), [0.5])


def test_rotate_left():
    assert rotate_left([3, 1, 2], 1) == (1, 2, 3)
    assert rotate_left([3, 1, 2], 4) == (1, 2, 3)
    assert rotate_left([], 2) == ()


def test_skew_matrix_is_cross_product():
    a = np.array([1.0, 2.0, 3.0])
    b = np.array([-2.0, 0.5, 4.0])
    np.testing.assert_allclose(skew_matrix(a) @ b, np.cross(a, b))
    with pytest.raises(ValueError):
        skew_matrix([1.0, 2.0])


def test_inflate_bounds():
    np.testing.assert_allclose(inflate_bounds([0, 1, 0, 2], 0.5), [-0.5, 1.5, -0.5, 2.5])
    np.testing.assert_allclose(inflate_bounds([0, 1, 0, 2], [0.5, 0.0]), [-0.5, 1.5, 0.0, 2.0])
    with pytest.raises(ValueError):
        inflate_bounds([0, 1, 0, 2], [0.5, 0.5, 0.5])


def test_is_xyz_inside_box():
    assert is_xyz_inside_box([0.5, 0.5], [0, 1, 0, 1])
    assert is_xyz_inside_box([1.0, 0.0], [0, 1, 0, 1])
    assert not is_xyz_inside_box([1.1, 0.0], [0, 1, 0, 1])
    assert is_xyz_inside_box([0.5, 0.5], [0, 1, 0, 1, -1, 1])


def test_setup_logging(tmp_path):
    log_file = tmp_path / "fecore.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        assert logger.name == "fecore"
        assert len(logger.handlers) == 2

        logging.getLogger("fecore.geometry.topology").debug("child record")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized at DEBUG (contracts enabled)." in text
        assert "child record" in text

        stream = io.StringIO()
        logger = setup_logging("warning", stream=stream)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        logging.getLogger("fecore.solvers").info("hidden")
        logging.getLogger("fecore.solvers").warning("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def test_resolve_level(monkeypatch):
    assert resolve_level(logging.DEBUG) == logging.DEBUG
    assert resolve_level("error") == logging.ERROR
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_level(None) == logging.DEBUG
    monkeypatch.delenv(LOG_LEVEL_ENV)
    assert resolve_level(None) == logging.INFO
    with pytest.raises(ValueError):
        resolve_level("chatty")
