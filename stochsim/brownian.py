"""Langevin (BD3) integration of a trapped Brownian particle in a harmonic well."""

from __future__ import annotations

import argparse
import math
import os
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

KB = 1.380649e-8  # Boltzmann constant, um^2 ug / (ms^2 K)
MASS = 3.0134e-5  # particle mass, ug
W0 = 19.477  # trap angular frequency, rad/ms
TEMPERATURE = 297.0  # K
TAU_HIGH = 147.3e-3  # relaxation time, ms
TAU_LOW = 48.5e-3  # relaxation time, ms


@dataclass(frozen=True)
class OscillatorState:
    """Position and velocity of the particle."""

    position: float
    velocity: float


def bd3_step(
    state: OscillatorState,
    w0: float,
    dt: float,
    eta: float,
    kb: float,
    mass: float,
    temperature: float,
    rng: np.random.Generator,
) -> OscillatorState:
    """Advance the particle one BD3 step and return the new state."""
    c0 = math.exp(-eta * dt)
    vth = math.sqrt(kb * temperature / mass)
    g1 = rng.standard_normal()
    g2 = rng.standard_normal()
    sqrt_c0 = math.sqrt(c0)
    noise = vth * math.sqrt(1.0 - c0)

    x = state.position
    a = -w0 * w0 * x
    v_half = 0.5 * a * dt + sqrt_c0 * state.velocity + noise * g1
    x = x + v_half * dt
    a = -w0 * w0 * x
    v = 0.5 * sqrt_c0 * a * dt + sqrt_c0 * v_half + noise * g2
    return OscillatorState(float(x), float(v))


def run_simulation(
    path: str | os.PathLike[str],
    w0: float,
    eta: float,
    kb: float,
    mass: float,
    temperature: float,
    rng: np.random.Generator,
    dt: float,
    num_steps: int,
) -> list[tuple[float, float, float]]:
    """Run from rest, write "time position velocity" lines after a 10 % burn-in.

    Returns the rows that were written.
    """
    if num_steps < 0:
        raise ValueError(f"number of steps must not be negative, got {num_steps}")
    burn_in = num_steps // 10
    state = OscillatorState(0.0, 0.0)
    rows: list[tuple[float, float, float]] = []
    with open(path, "w", encoding="utf-8") as fh:
        for i in range(num_steps):
            state = bd3_step(state, w0, dt, eta, kb, mass, temperature, rng)
            if i > burn_in:
                row = (i * dt, state.position, state.velocity)
                fh.write(f"{row[0]:f}\t{row[1]:f}\t{row[2]:f}\n")
                rows.append(row)
    return rows


def write_trajectory_csv(
    path: str | os.PathLike[str], rows: Iterable[Sequence[float]]
) -> None:
    """Write (x, v, t) rows as CSV with an "x,v,t" header."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("x,v,t\n")
        for x, v, t in rows:
            fh.write(f"{x:f}, {v:f}, {t:f}\n")


def _sample_from_rest(
    w0: float,
    dt: float,
    eta: float,
    rng: np.random.Generator,
    equilibration: int,
    samples: int,
) -> list[tuple[float, float, float]]:
    # Every step starts again from the particle at rest at the origin.
    rest = OscillatorState(0.0, 0.0)
    step = bd3_step(rest, w0, dt, eta, KB, MASS, TEMPERATURE, rng)
    for _ in range(equilibration):
        step = bd3_step(rest, w0, dt, eta, KB, MASS, TEMPERATURE, rng)
    rows = []
    for i in range(samples):
        rows.append((step.position, step.velocity, i * dt))
        step = bd3_step(rest, w0, dt, eta, KB, MASS, TEMPERATURE, rng)
    return rows


def main(argv: Sequence[str] | None = None) -> int:
    """Run the trapped-particle simulations and write their trajectories."""
    parser = argparse.ArgumentParser(
        description="Simulate a Brownian particle in a harmonic trap."
    )
    parser.add_argument("--output-dir", default=".", help="directory for output files")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--steps", type=int, default=100000, help="steps per simulation (text output)"
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="write short CSV sample sets 00.csv .. 11.csv instead",
    )
    args = parser.parse_args(argv)

    if args.csv:
        rng = np.random.default_rng(args.seed)
        etas = (1.0 / TAU_LOW, 1.0 / TAU_HIGH)
        dts = (0.001, 0.005)
        for j, eta in enumerate(etas):
            for p, dt in enumerate(dts):
                rows = _sample_from_rest(W0, dt, eta, rng, 2000, 1000)
                write_trajectory_csv(os.path.join(args.output_dir, f"{j}{p}.csv"), rows)
        return 0

    rng = np.random.default_rng(12345 if args.seed is None else args.seed)
    eta_low = 1.0 / TAU_HIGH
    eta_high = 1.0 / TAU_LOW
    dt_high, dt_low = 0.05, 0.001
    runs = (
        (eta_low, dt_high, "le_hdt.txt"),
        (eta_low, dt_low, "le_ldt.txt"),
        (eta_high, dt_high, "he_hdt.txt"),
        (eta_high, dt_low, "he_ldt.txt"),
    )
    for eta, dt, name in runs:
        run_simulation(
            os.path.join(args.output_dir, name),
            W0,
            eta,
            KB,
            MASS,
            TEMPERATURE,
            rng,
            dt,
            args.steps,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())