import math

import numpy as np
import pytest

from stochsim.mcmc import (
    StepResult,
    estimate_integral,
    integrand,
    main,
    mcmc_step_displace_all,
    normalized_weight,
    tune_delta,
    weight,
)


class ScriptedRng:
    """Hands out uniform numbers from a fixed list."""

    def __init__(self, values):
        self._values = list(values)

    def random(self, size=None):
        if size is None:
            return self._values.pop(0)
        out = [self._values.pop(0) for _ in range(size)]
        return np.array(out)


def test_weight_at_origin_is_one():
    assert weight((0.0, 0.0, 0.0)) == 1.0


def test_weight_is_radially_symmetric():
    assert weight((0.3, -0.4, 0.0)) == pytest.approx(weight((0.0, 0.0, 0.5)))


def test_normalized_weight_scales_by_pi_power():
    point = (0.2, 0.1, -0.7)
    assert normalized_weight(point) / weight(point) == pytest.approx(math.pi**-1.5)


def test_integrand_all_ones():
    assert integrand((1.0, 1.0, 1.0)) == 3.0


def test_integrand_vanishes_when_x_is_zero():
    assert integrand((0.0, 5.0, 7.0)) == 0.0


def test_wrong_dimension_raises():
    with pytest.raises(ValueError):
        weight((1.0, 2.0))
    with pytest.raises(ValueError):
        mcmc_step_displace_all((0.0, 0.0, 0.0, 0.0), 1.0, np.random.default_rng(0))


def test_step_accepted_moves_walker():
    rng = ScriptedRng([0.75, 0.5, 0.5, 0.1])
    result = mcmc_step_displace_all((0.0, 0.0, 0.0), 2.0, rng)
    assert result.accepted is True
    assert result.position == pytest.approx((0.5, 0.0, 0.0))
    assert result.weight == pytest.approx(weight((0.5, 0.0, 0.0)))
    assert result.function_value == pytest.approx(integrand((0.5, 0.0, 0.0)))


def test_step_rejected_keeps_walker():
    rng = ScriptedRng([0.75, 0.5, 0.5, 0.99])
    start = (0.0, 0.0, 0.0)
    result = mcmc_step_displace_all(start, 2.0, rng)
    assert result.accepted is False
    assert result.position == start
    assert result.weight == 1.0
    assert result.function_value == 0.0


def test_step_does_not_modify_input():
    start = [0.1, 0.2, 0.3]
    mcmc_step_displace_all(start, 1.0, np.random.default_rng(3))
    assert start == [0.1, 0.2, 0.3]


def test_zero_delta_always_accepts_and_stays():
    rng = np.random.default_rng(1)
    start = (0.4, -0.2, 0.9)
    for _ in range(20):
        result = mcmc_step_displace_all(start, 0.0, rng)
        assert result.accepted
        assert result.position == pytest.approx(start)


def test_downhill_move_toward_origin_always_accepted():
    rng = ScriptedRng([0.0, 0.5, 0.5, 0.999])
    result = mcmc_step_displace_all((1.0, 0.0, 0.0), 1.0, rng)
    assert result.accepted
    assert result.position == pytest.approx((0.5, 0.0, 0.0))


def test_same_seed_reproduces_step():
    a = mcmc_step_displace_all((0.1, 0.1, 0.1), 1.5, np.random.default_rng(42))
    b = mcmc_step_displace_all((0.1, 0.1, 0.1), 1.5, np.random.default_rng(42))
    assert isinstance(a, StepResult)
    assert a == b


def test_tune_delta_grows_small_step():
    position, delta, history = tune_delta(
        (0.0, 0.0, 0.0), 1e-6, np.random.default_rng(0), 1, 10, 0.5
    )
    assert delta == pytest.approx(1e-6 * 1.1)
    assert history[0][1] == 1.0
    assert len(position) == 3


def test_tune_delta_shrinks_huge_step():
    _, delta, history = tune_delta(
        (0.0, 0.0, 0.0), 1e6, np.random.default_rng(0), 2, 20, 0.5
    )
    assert delta == pytest.approx(1e6 * 0.9 * 0.9)
    assert all(ratio == 0.0 for _, ratio in history)


def test_tune_delta_history_length_and_final_delta():
    _, delta, history = tune_delta(
        (0.0, 0.0, 0.0), 1.0, np.random.default_rng(5), 30, 50, 0.5
    )
    assert len(history) == 30
    assert history[-1][0] == delta
    assert all(0.0 <= ratio <= 1.0 for _, ratio in history)


def test_tune_delta_rejects_bad_batch():
    with pytest.raises(ValueError):
        tune_delta((0.0, 0.0, 0.0), 1.0, np.random.default_rng(0), 1, 0, 0.5)


def test_estimate_integral_requires_positive_steps():
    with pytest.raises(ValueError):
        estimate_integral((0.0, 0.0, 0.0), 1.0, np.random.default_rng(0), 0)


def test_estimate_integral_is_reproducible():
    a = estimate_integral((0.0, 0.0, 0.0), 1.0, np.random.default_rng(7), 500)
    b = estimate_integral((0.0, 0.0, 0.0), 1.0, np.random.default_rng(7), 500)
    assert a == b
    assert 0.0 <= a[1] <= 1.0
    assert a[0] >= 0.0


def test_estimate_integral_converges():
    integral, ratio, _ = estimate_integral(
        (0.0, 0.0, 0.0), 2.0, np.random.default_rng(12345), 50000
    )
    assert integral == pytest.approx(0.875, abs=0.15)
    assert 0.0 < ratio < 1.0


def test_main_prints_summary(capsys):
    assert main(["--warmup", "2", "--batch", "10", "--steps", "200"]) == 0
    out = capsys.readouterr().out
    assert "Warmup Step 1:" in out
    assert "Final Delta:" in out
    assert "Estimated Integral:" in out