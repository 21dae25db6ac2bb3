"""Monte Carlo estimates of the integral of x(1 - x) over [0, 1]."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

PI = 3.141592653589
EXACT_VALUE = 1.0 / 6.0
SAMPLE_SIZES = (10, 100, 1000, 10000)


@dataclass(frozen=True)
class IntegrationResult:
    """An integral estimate and its standard error."""

    integral: float
    error: float


def _estimate(values: np.ndarray, n: int) -> IntegrationResult:
    integral = float(values.sum() / n)
    variance = float(np.dot(values, values) / n) - integral * integral
    # Rounding can push a tiny variance just below zero.
    variance = max(variance, 0.0)
    return IntegrationResult(integral, math.sqrt(variance / n))


def mc_without_importance_sampling(n: int, rng: np.random.Generator) -> IntegrationResult:
    """Estimate the integral from n uniform samples on [0, 1)."""
    if n <= 0:
        raise ValueError(f"number of samples must be positive, got {n}")
    x = np.asarray(rng.random(n), dtype=float)
    f = x * (1.0 - x)
    return _estimate(f, n)


def mc_with_importance_sampling(n: int, rng: np.random.Generator) -> IntegrationResult:
    """Estimate the integral from n samples drawn from p(x) = (pi/2) sin(pi x).

    Samples where p(x) is not positive contribute nothing; with no samples the
    estimate and its error are both zero.
    """
    if n <= 0:
        return IntegrationResult(0.0, 0.0)
    u = np.asarray(rng.random(n), dtype=float)
    x = np.arccos(1.0 - 2.0 * u) / PI
    f = x * (1.0 - x)
    p = (PI / 2.0) * np.sin(PI * x)
    positive = p > 0.0
    weighted = f[positive] / p[positive]
    return _estimate(weighted, n)


def main(argv: Sequence[str] | None = None) -> int:
    """Print plain and importance-sampled estimates for several sample sizes."""
    parser = argparse.ArgumentParser(
        description="Monte Carlo integration of x(1 - x) on [0, 1]."
    )
    parser.add_argument("--seed", type=int, default=0, help="random seed")
    args = parser.parse_args(argv)

    rng = np.random.default_rng(args.seed)
    print("N\tWithout Importance Sampling\tError\tWith Importance Sampling\tError")
    print("-" * 72)
    for n in SAMPLE_SIZES:
        plain = mc_without_importance_sampling(n, rng)
        weighted = mc_with_importance_sampling(n, rng)
        print(
            f"{n}\t{plain.integral:.6f}\t\t\t{abs(plain.integral - EXACT_VALUE):.6f}"
            f"\t{weighted.integral:.6f}\t\t\t{abs(weighted.integral - EXACT_VALUE):.6f}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())