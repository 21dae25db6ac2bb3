"""Fixed-end chain of particles: normal modes, forces, energies and integration."""

from __future__ import annotations

import numpy as np

from .vectors import ArrayLike, matrix_vector_multiplication


def _vector(v: ArrayLike) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"expected a one-dimensional vector, got shape {arr.shape}")
    return arr


def _mode_matrix(n: int) -> np.ndarray:
    index = np.arange(1, n + 1)
    return np.sqrt(2.0 / (n + 1)) * np.sin(np.outer(index, index) * np.pi / (n + 1))


def transform_to_normal_modes(positions: ArrayLike) -> np.ndarray:
    """Return the normal-mode coordinates Q of a chain with fixed ends."""
    x = _vector(positions)
    if x.size == 0:
        return x.copy()
    return matrix_vector_multiplication(_mode_matrix(x.size), x)


def calculate_normal_mode_energies(
    positions: ArrayLike, velocities: ArrayLike
) -> np.ndarray:
    """Return the harmonic energy held in each normal mode."""
    x, v = _vector(positions), _vector(velocities)
    if x.shape != v.shape:
        raise ValueError(f"vector lengths differ: {x.size} and {v.size}")
    n = x.size
    q = transform_to_normal_modes(x)
    p = transform_to_normal_modes(v)
    omega = 2.0 * np.sin(np.arange(1, n + 1) * np.pi / (2.0 * (n + 1)))
    return 0.5 * (p * p + omega * omega * q * q)


def calculate_acceleration(positions: ArrayLike, alpha: float) -> np.ndarray:
    """Return the accelerations of a chain with fixed ends and cubic anharmonicity alpha."""
    x = _vector(positions)
    if x.size == 0:
        return x.copy()
    padded = np.concatenate(([0.0], x, [0.0]))
    right = padded[2:] - x
    left = x - padded[:-2]
    return (right - left) + alpha * (right * right - left * left)


def calculate_potential_energy(positions: ArrayLike, kappa: float) -> float:
    """Return the spring energy of a three-particle chain."""
    x = _vector(positions)
    if x.size < 3:
        raise ValueError(f"expected three positions, got {x.size}")
    return float(
        0.5 * kappa * (x[1] - x[0]) ** 2 + 0.5 * kappa * (x[2] - x[1]) ** 2
    )


def calculate_kinetic_energy(velocities: ArrayLike, masses: ArrayLike) -> float:
    """Return the kinetic energy of three particles."""
    v, m = _vector(velocities), _vector(masses)
    if v.size < 3 or m.size < 3:
        raise ValueError("expected three velocities and three masses")
    return float(np.sum(0.5 * m[:3] * v[:3] * v[:3]))


def velocity_verlet_one_step(
    accelerations: ArrayLike,
    positions: ArrayLike,
    velocities: ArrayLike,
    alpha: float,
    timestep: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Advance the chain one step; return new (accelerations, positions, velocities)."""
    a, x, v = _vector(accelerations), _vector(positions), _vector(velocities)
    if not (a.shape == x.shape == v.shape):
        raise ValueError("accelerations, positions and velocities differ in length")
    v = v + 0.5 * a * timestep
    x = x + v * timestep
    a = calculate_acceleration(x, alpha)
    v = v + 0.5 * a * timestep
    return a, x, v