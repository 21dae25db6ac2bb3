"""Metropolis sampling of a three-dimensional Gaussian weight."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

PI = 3.141592653589793
_NORMALIZATION = PI**-1.5
_RATIO_TOLERANCE = 0.05
_GROW = 1.1
_SHRINK = 0.9


@dataclass(frozen=True)
class StepResult:
    """Outcome of one Metropolis step.

    ``position`` is where the walker ends up, ``weight`` and ``function_value``
    are evaluated there, and ``accepted`` tells whether the proposed move was taken.
    """

    position: tuple[float, float, float]
    weight: float
    function_value: float
    accepted: bool


def _position(x: Sequence[float]) -> tuple[float, float, float]:
    values = tuple(float(c) for c in np.asarray(x, dtype=float).ravel())
    if len(values) != 3:
        raise ValueError(f"walker position must have three coordinates, got {len(values)}")
    return values  # type: ignore[return-value]


def weight(x: Sequence[float]) -> float:
    """Return the unnormalised weight exp(-r^2)."""
    px, py, pz = _position(x)
    return math.exp(-(px * px + py * py + pz * pz))


def normalized_weight(x: Sequence[float]) -> float:
    """Return the normalised weight pi^(-3/2) exp(-r^2)."""
    return _NORMALIZATION * weight(x)


def integrand(x: Sequence[float]) -> float:
    """Return f(x, y, z) = x^2 + x^2 y^2 + x^2 y^2 z^2."""
    px, py, pz = _position(x)
    term1 = px * px
    term2 = term1 * py * py
    term3 = term2 * pz * pz
    return term1 + term2 + term3


def mcmc_step_displace_all(
    x: Sequence[float], delta: float, rng: np.random.Generator
) -> StepResult:
    """Displace all three coordinates uniformly by up to delta/2 and accept or reject.

    Three uniform draws displace x, y and z in that order; a fourth draw decides
    acceptance. The input position is left untouched.
    """
    old = _position(x)
    weight_old = weight(old)
    draws = np.asarray(rng.random(3), dtype=float)
    proposed = tuple(c + delta * (float(r) - 0.5) for c, r in zip(old, draws))
    weight_new = weight(proposed)
    if weight_old == 0.0:
        acceptance = math.nan if weight_new == 0.0 else math.inf
    else:
        acceptance = weight_new / weight_old
    r_accept = float(rng.random())

    accepted = r_accept < acceptance
    final = proposed if accepted else old
    return StepResult(
        position=final,  # type: ignore[arg-type]
        weight=weight(final),
        function_value=integrand(final),
        accepted=accepted,
    )


def tune_delta(
    x: Sequence[float],
    delta: float,
    rng: np.random.Generator,
    warmup_steps: int = 1000,
    batch_size: int = 100,
    target_ratio: float = 0.5,
) -> tuple[tuple[float, float, float], float, list[tuple[float, float]]]:
    """Adjust the step size towards a target acceptance ratio.

    Each warm-up step runs a batch of moves; delta grows by 10 % when the
    acceptance ratio exceeds the target by more than 0.05 and shrinks by 10 %
    when it falls short by more than that. Returns the final position, the
    final delta and, for every warm-up step, the pair (delta, acceptance ratio).
    """
    if warmup_steps < 0:
        raise ValueError(f"number of warm-up steps must not be negative, got {warmup_steps}")
    if batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    position = _position(x)
    history: list[tuple[float, float]] = []
    for _ in range(warmup_steps):
        accepted = 0
        for _ in range(batch_size):
            result = mcmc_step_displace_all(position, delta, rng)
            position = result.position
            accepted += result.accepted
        ratio = accepted / batch_size
        if ratio > target_ratio + _RATIO_TOLERANCE:
            delta *= _GROW
        elif ratio < target_ratio - _RATIO_TOLERANCE:
            delta *= _SHRINK
        history.append((delta, ratio))
    return position, delta, history


def estimate_integral(
    x: Sequence[float], delta: float, rng: np.random.Generator, steps: int = 10000
) -> tuple[float, float, tuple[float, float, float]]:
    """Average the integrand along a Metropolis chain.

    Returns the estimate, the acceptance ratio and the final walker position.
    """
    if steps <= 0:
        raise ValueError(f"number of steps must be positive, got {steps}")
    position = _position(x)
    total = 0.0
    accepted = 0
    for _ in range(steps):
        result = mcmc_step_displace_all(position, delta, rng)
        position = result.position
        accepted += result.accepted
        total += result.function_value
    return total / steps, accepted / steps, position


def main(argv: Sequence[str] | None = None) -> int:
    """Tune the step size, then estimate the integral by Metropolis sampling."""
    parser = argparse.ArgumentParser(
        description="Metropolis estimate of <x^2 + x^2 y^2 + x^2 y^2 z^2> under exp(-r^2)."
    )
    parser.add_argument("--seed", type=int, default=12345, help="random seed")
    parser.add_argument("--delta", type=float, default=1.0, help="initial step size")
    parser.add_argument("--steps", type=int, default=10000, help="sampling steps")
    parser.add_argument(
        "--warmup", type=int, default=1000, help="warm-up steps for tuning (0 to skip)"
    )
    parser.add_argument("--batch", type=int, default=100, help="moves per warm-up step")
    parser.add_argument(
        "--target", type=float, default=0.5, help="target acceptance ratio"
    )
    args = parser.parse_args(argv)

    rng = np.random.default_rng(args.seed)
    position, delta, history = tune_delta(
        (0.0, 0.0, 0.0), args.delta, rng, args.warmup, args.batch, args.target
    )
    for i, (step_delta, ratio) in enumerate(history):
        print(f"Warmup Step {i}: Delta = {step_delta:f}, Acceptance Ratio = {ratio:f}")

    integral, ratio, _ = estimate_integral(position, delta, rng, args.steps)
    print(f"Final Delta: {delta:f}")
    print(f"Final Acceptance Ratio: {ratio:f}")
    print(f"Estimated Integral: {integral:f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())