import pytest

from simplexmin.optimization import InvalidInputError, NelderMeadConfig


def test_defaults():
    cfg = NelderMeadConfig()

    assert cfg.function_tolerance == 3e-8
    assert cfg.max_evaluations == 5000
    assert cfg.epsilon == 1e-10
    assert cfg.track_history is False
    assert cfg.verbose is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"function_tolerance": 0.0},
        {"function_tolerance": -1e-3},
        {"function_tolerance": "tight"},
        {"max_evaluations": 0},
        {"max_evaluations": 10.5},
        {"max_evaluations": True},
        {"epsilon": 0.0},
        {"epsilon": -1e-10},
    ],
)
def test_invalid_options(kwargs):
    with pytest.raises(InvalidInputError):
        NelderMeadConfig(**kwargs)


def test_replace_validates():
    cfg = NelderMeadConfig().replace(max_evaluations=100)
    assert cfg.max_evaluations == 100

    with pytest.raises(InvalidInputError):
        NelderMeadConfig().replace(max_evaluations=-1)
    with pytest.raises(InvalidInputError):
        NelderMeadConfig().replace(maxiter=10)


def test_from_directives_ignores_foreign_keys():
    cfg = NelderMeadConfig.from_directives(
        {"function_tolerance": 1e-6, "max_evaluations": 50, "population_size": 20, "lower_bound": 0.0}
    )

    assert cfg.function_tolerance == 1e-6
    assert cfg.max_evaluations == 50
    assert cfg.as_dict() == {
        "function_tolerance": 1e-6,
        "max_evaluations": 50,
        "epsilon": 1e-10,
        "track_history": False,
        "verbose": False,
    }
