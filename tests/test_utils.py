import logging

import numpy as np
import pytest

from simplexmin import minimize
from simplexmin.utils import (
    LOG_FORMAT,
    rosenbrock,
    setup_logging,
    shifted_quadratic,
    sphere,
)


@pytest.mark.parametrize(
    "fobj, minimum",
    [
        (sphere, np.zeros(3)),
        (rosenbrock, np.ones(3)),
        (shifted_quadratic([1.0, 2.0, 3.0]), np.array([1.0, 2.0, 3.0])),
    ],
)
def test_benchmarks_vanish_at_their_minimum(fobj, minimum):
    assert fobj(minimum) == pytest.approx(0.0, abs=1e-12)
    assert fobj(minimum + 0.1) > 0.0


@pytest.mark.parametrize(
    "fobj, minimum",
    [
        (sphere, np.zeros(3)),
        (shifted_quadratic([1.0, 2.0, 3.0]), np.array([1.0, 2.0, 3.0])),
    ],
)
def test_benchmarks_are_solved_from_a_distant_start(fobj, minimum):
    res = minimize(fobj, x0=minimum + 2.0, delta=1.0)

    assert res.success
    np.testing.assert_allclose(res.point, minimum, atol=1e-3)


def test_setup_logging_writes_run_summary(tmp_path):
    logfile = tmp_path / "nelder-mead.log"
    logger = setup_logging(logfile, level=logging.DEBUG)
    try:
        minimize(sphere, x0=[1.0, 1.0])
        for handler in logging.getLogger().handlers:
            handler.flush()
    finally:
        for handler in list(logging.getLogger().handlers):
            logging.getLogger().removeHandler(handler)
            handler.close()

    text = logfile.read_text(encoding="utf-8")
    assert logger.name == "simplexmin"
    assert "simplexmin.optimization.nelder - INFO - Nelder-Mead converged" in text
    assert "move=" in text
    assert LOG_FORMAT.startswith("%(asctime)s")


def test_budget_exhaustion_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="simplexmin"):
        res = minimize(sphere, x0=[1.0, 1.0], max_evaluations=5)

    assert not res.success
    assert "stopped without converging" in caplog.text
