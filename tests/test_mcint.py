import numpy as np
import pytest

from stochsim.mcint import (
    IntegrationResult,
    main,
    mc_with_importance_sampling,
    mc_without_importance_sampling,
)


class _ConstantRng:
    def __init__(self, value):
        self.value = value

    def random(self, size):
        return np.full(size, self.value)


def test_plain_estimate_close_to_exact():
    result = mc_without_importance_sampling(100000, np.random.default_rng(1))
    assert abs(result.integral - 1.0 / 6.0) < 5 * result.error
    assert result.error > 0.0


def test_importance_estimate_close_to_exact():
    result = mc_with_importance_sampling(100000, np.random.default_rng(2))
    assert abs(result.integral - 1.0 / 6.0) < 5 * result.error + 1e-12
    assert result.error > 0.0


def test_importance_sampling_reduces_error():
    plain = mc_without_importance_sampling(50000, np.random.default_rng(3))
    weighted = mc_with_importance_sampling(50000, np.random.default_rng(3))
    assert weighted.error < plain.error


def test_same_seed_same_result():
    a = mc_without_importance_sampling(1000, np.random.default_rng(7))
    b = mc_without_importance_sampling(1000, np.random.default_rng(7))
    assert a == b
    c = mc_with_importance_sampling(1000, np.random.default_rng(7))
    d = mc_with_importance_sampling(1000, np.random.default_rng(7))
    assert c == d


def test_constant_samples_give_zero_error():
    result = mc_without_importance_sampling(10, _ConstantRng(0.5))
    assert result.integral == pytest.approx(0.25)
    assert result.error == pytest.approx(0.0)


def test_importance_constant_samples_have_no_spread():
    result = mc_with_importance_sampling(8, _ConstantRng(0.5))
    assert result.error == pytest.approx(0.0, abs=1e-12)
    assert result.integral > 0.0


def test_importance_zero_samples_gives_zero():
    assert mc_with_importance_sampling(0, np.random.default_rng(0)) == IntegrationResult(
        0.0, 0.0
    )


def test_importance_skips_non_positive_weight():
    # u = 0 maps to x = 0 where p(x) = 0; the sample adds nothing.
    result = mc_with_importance_sampling(5, _ConstantRng(0.0))
    assert result == IntegrationResult(0.0, 0.0)


@pytest.mark.parametrize("n", [0, -3])
def test_plain_rejects_non_positive_count(n):
    with pytest.raises(ValueError):
        mc_without_importance_sampling(n, np.random.default_rng(0))


def test_main_prints_table(capsys):
    assert main(["--seed", "4"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("N\tWithout Importance Sampling")
    assert set(lines[1]) == {"-"}
    assert [line.split("\t")[0] for line in lines[2:]] == ["10", "100", "1000", "10000"]
    last = [field for field in lines[5].split("\t") if field]
    assert abs(float(last[1]) - 1.0 / 6.0) < 0.02
    assert abs(float(last[3]) - 1.0 / 6.0) < 0.02