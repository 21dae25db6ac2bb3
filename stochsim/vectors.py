"""Small vector and matrix helpers on top of numpy arrays."""

from __future__ import annotations

from typing import Iterable

import numpy as np

ArrayLike = Iterable[float] | np.ndarray


def _vector(v: ArrayLike) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"expected a one-dimensional vector, got shape {arr.shape}")
    return arr


def _matrix(a: ArrayLike) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"expected a two-dimensional matrix, got shape {arr.shape}")
    return arr


def _same_length(v1: np.ndarray, v2: np.ndarray) -> None:
    if v1.shape != v2.shape:
        raise ValueError(f"vector lengths differ: {v1.shape[0]} and {v2.shape[0]}")


def elementwise_addition(v1: ArrayLike, v2: ArrayLike) -> np.ndarray:
    """Return v1 + v2 element by element."""
    a, b = _vector(v1), _vector(v2)
    _same_length(a, b)
    return a + b


def elementwise_multiplication(v1: ArrayLike, v2: ArrayLike) -> np.ndarray:
    """Return v1 * v2 element by element."""
    a, b = _vector(v1), _vector(v2)
    _same_length(a, b)
    return a * b


def addition_with_constant(v: ArrayLike, constant: float) -> np.ndarray:
    """Return v with constant added to every element."""
    return _vector(v) + constant


def multiplication_with_constant(v: ArrayLike, constant: float) -> np.ndarray:
    """Return v with every element multiplied by constant."""
    return _vector(v) * constant


def dot_product(v1: ArrayLike, v2: ArrayLike) -> float:
    """Return the dot product of two vectors of equal length."""
    a, b = _vector(v1), _vector(v2)
    _same_length(a, b)
    return float(np.dot(a, b))


def create_2d_array(n: int, m: int) -> np.ndarray:
    """Return an n x m matrix filled with zeros."""
    if n <= 0 or m <= 0:
        raise ValueError(f"Invalid dimensions for 2D array: rows={n}, columns={m}")
    return np.zeros((n, m), dtype=float)


def matrix_vector_multiplication(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Return A b for an n x m matrix A and a vector b of length m."""
    mat, vec = _matrix(a), _vector(b)
    if mat.shape[1] != vec.shape[0]:
        raise ValueError(
            f"cannot multiply matrix of shape {mat.shape} with vector of length {vec.shape[0]}"
        )
    return mat @ vec


def matrix_matrix_multiplication(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Return A B for an n x m matrix A and an m x k matrix B."""
    left, right = _matrix(a), _matrix(b)
    if left.shape[1] != right.shape[0]:
        raise ValueError(f"cannot multiply matrices of shapes {left.shape} and {right.shape}")
    return left @ right


def vector_norm(v: ArrayLike) -> float:
    """Return the L2 norm of v."""
    arr = _vector(v)
    return float(np.sqrt(np.dot(arr, arr)))


def normalize_vector(v: ArrayLike) -> np.ndarray:
    """Return v scaled to unit L2 norm; a zero vector is returned unchanged."""
    arr = _vector(v).copy()
    norm = vector_norm(arr)
    if norm == 0.0:
        return arr
    return arr / norm


def average(v: ArrayLike) -> float:
    """Return the mean of v, or 0 for an empty vector."""
    arr = _vector(v)
    if arr.size == 0:
        return 0.0
    return float(arr.sum() / arr.size)


def standard_deviation(v: ArrayLike) -> float:
    """Return the population standard deviation of v, or 0 for an empty vector."""
    arr = _vector(v)
    if arr.size == 0:
        return 0.0
    diff = arr - average(arr)
    return float(np.sqrt(np.dot(diff, diff) / arr.size))


def distance_between_vectors(v1: ArrayLike, v2: ArrayLike) -> float:
    """Return the Euclidean distance between two points."""
    a, b = _vector(v1), _vector(v2)
    _same_length(a, b)
    return vector_norm(a - b)


def cumulative_integration(v: ArrayLike, dx: float) -> np.ndarray:
    """Return the running trapezoidal integral of v with step dx, starting at 0."""
    arr = _vector(v)
    if arr.size == 0:
        return arr.copy()
    res = np.zeros_like(arr)
    res[1:] = np.cumsum((arr[:-1] + arr[1:]) * dx / 2.0)
    return res