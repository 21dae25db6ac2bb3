"""Statistical inefficiency of correlated samples: autocorrelation and block averaging."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import Iterable, Sequence

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 1000000
_TARGET = math.exp(-2.0)
_NEGLIGIBLE = 1e-5


def _data(v: Iterable[float] | np.ndarray) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"expected a one-dimensional sequence, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError("sequence must not be empty")
    return arr


def average(v: Iterable[float] | np.ndarray) -> float:
    """Return the mean of a non-empty sequence."""
    arr = _data(v)
    return float(arr.sum() / arr.size)


def variance(v: Iterable[float] | np.ndarray) -> float:
    """Return the population variance of a non-empty sequence."""
    arr = _data(v)
    diff = arr - average(arr)
    return float(np.dot(diff, diff) / arr.size)


def autocorrelation(data: Iterable[float] | np.ndarray, time_lag: int) -> float:
    """Return the normalised autocorrelation of data at the given lag.

    Constant data have no defined autocorrelation; zero is returned for them.
    """
    arr = _data(data)
    n = arr.size
    if not 0 <= time_lag < n:
        raise ValueError(f"time lag must lie in [0, {n}), got {time_lag}")
    var = variance(arr)
    if var == 0.0:
        return 0.0
    centered = arr - average(arr)
    count = n - time_lag
    numerator = float(np.dot(centered[:count], centered[time_lag:])) / count
    return numerator / var


def block_average(data: Iterable[float] | np.ndarray, block_size: int) -> float:
    """Return the statistical inefficiency estimated with blocks of the given size.

    Whole blocks only are used. Returns NaN for constant data.
    """
    arr = _data(data)
    n = arr.size
    if block_size <= 0 or block_size > n:
        raise ValueError(f"block size must lie in [1, {n}], got {block_size}")
    num_blocks = n // block_size
    means = arr[: num_blocks * block_size].reshape(num_blocks, block_size).mean(axis=1)
    data_var = variance(arr)
    if data_var == 0.0:
        return math.nan
    return block_size * variance(means) / data_var


def moving_average(values: Sequence[float], window_size: int, idx: int) -> float:
    """Return the mean of the values within window_size // 2 of idx.

    Positions outside the sequence are left out; if none remain, values[idx]
    is returned.
    """
    half = int(window_size / 2)
    lo = max(idx - half, 0)
    hi = min(idx + half, len(values) - 1)
    window = [values[i] for i in range(lo, hi + 1)]
    if not window:
        return float(values[idx])
    return sum(window) / len(window)


def find_s_from_autocorr(data: Iterable[float] | np.ndarray) -> float:
    """Return 1/2 + 2 * sum of autocorrelations until they fall below exp(-2).

    Lags up to a twentieth of the data length are considered.
    """
    arr = _data(data)
    max_lag = arr.size // 20
    s = 0.5
    for lag in range(1, max_lag):
        phi = autocorrelation(arr, lag)
        if phi < _TARGET or phi < _NEGLIGIBLE:
            break
        s += 2.0 * phi
    return s


def find_s_from_autocorr_lag(data: Iterable[float] | np.ndarray) -> float:
    """Return the first lag at which the autocorrelation drops to exp(-2) or below.

    The search stops at a hundredth of the data length, at most 100000 lags;
    that limit is returned if no such lag is found.
    """
    arr = _data(data)
    max_lag = min(arr.size // 100, 100000)
    for lag in range(1, max_lag):
        if autocorrelation(arr, lag) <= _TARGET:
            return float(lag)
    return float(max_lag)


def find_s_from_block_averaging(data: Iterable[float] | np.ndarray) -> float:
    """Return the block-averaging estimate of s once it has levelled off.

    Block sizes grow in steps of 40 up to a tenth of the data length. Each
    estimate is smoothed over five neighbours; when twenty successive smoothed
    values change by less than 0.5 %, the last is returned. Otherwise the last
    smoothed value is returned, or -1 if there was none.
    """
    arr = _data(data)
    max_block_size = arr.size // 10
    tolerance = 0.005
    step = 40
    stabilization_window = 20

    s_values: list[float] = []
    prev_s = -1.0
    final_s = -1.0
    stable = 0
    for block_size in range(step, max_block_size + 1, step):
        s_val = block_average(arr, block_size)
        s_values.append(s_val)
        if math.isnan(s_val) or s_val <= 0.0:
            continue
        logger.info("Block size %d: s = %.5f", block_size, s_val)
        smoothed = moving_average(s_values, 5, len(s_values) - 1)
        if prev_s > 0.0:
            if abs(smoothed - prev_s) / prev_s < tolerance:
                stable += 1
                if stable >= stabilization_window:
                    final_s = smoothed
                    break
            else:
                stable = 0
        prev_s = smoothed
    return final_s if final_s > 0.0 else prev_s


def find_s_from_block_doubling(
    data: Iterable[float] | np.ndarray, s_auto_hint: float
) -> float:
    """Return the block-averaging estimate of s with doubling block sizes.

    Block sizes double from 1 up to a hundredth of the data length. The search
    stops once two successive estimates differ by less than 1 % at a block
    size beyond s_auto_hint; otherwise the last estimate is returned, or -1
    if there was none.
    """
    arr = _data(data)
    tolerance = 0.01
    max_block_size = max(arr.size // 100, 1)
    prev_s = -1.0
    final_s = -1.0
    block_size = 1
    while block_size <= max_block_size:
        s_val = block_average(arr, block_size)
        if not math.isnan(s_val) and s_val > 0.0:
            logger.info("Block size %d: s = %g", block_size, s_val)
            if prev_s > 0.0:
                rel_diff = abs(s_val - prev_s) / prev_s
                if rel_diff < tolerance and block_size > s_auto_hint:
                    final_s = s_val
                    break
            prev_s = s_val
        block_size *= 2
    if final_s < 0.0:
        final_s = prev_s
    return final_s


def _read_values(path: str, count: int) -> np.ndarray:
    values = np.empty(count, dtype=float)
    with open(path, encoding="utf-8") as fh:
        tokens = (token for line in fh for token in line.split())
        for i in range(count):
            token = next(tokens, None)
            try:
                if token is None:
                    raise ValueError
                values[i] = float(token)
            except ValueError:
                raise ValueError(f"Error reading data at line {i + 1}") from None
    return values


def main(argv: Sequence[str] | None = None) -> int:
    """Read samples from a file and estimate their statistical inefficiency."""
    parser = argparse.ArgumentParser(
        description="Estimate the statistical inefficiency of correlated samples."
    )
    parser.add_argument("path", nargs="?", default="MC.txt", help="file of samples")
    parser.add_argument(
        "--count", type=int, default=DEFAULT_COUNT, help="number of samples to read"
    )
    parser.add_argument(
        "--doubling",
        action="store_true",
        help="use the first-crossing lag and doubling block sizes",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="print every block-size estimate"
    )
    args = parser.parse_args(argv)

    if args.count <= 0:
        print("number of samples must be positive", file=sys.stderr)
        return 1
    try:
        data = _read_values(args.path, args.count)
    except OSError as exc:
        print(f"Error opening {args.path}: {exc.strerror}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.verbose:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    try:
        mean = average(data)
        var = variance(data)
        centered = data - mean
        print(f"Data length: {data.size}")
        if args.doubling:
            print(f"Mean of data: {mean:f}")
            print(f"Variance of data: {var:f}")
            s_auto = find_s_from_autocorr_lag(centered)
            print(f"Estimated s from autocorrelation (centered data): {s_auto:g}")
            s_block = find_s_from_block_doubling(centered, s_auto)
            print(f"Estimated s from block averaging (centered data): {s_block:g}")
        else:
            print(f"Mean of data: {mean:.10f}")
            print(f"Variance of data: {var:.10f}")
            s_auto = find_s_from_autocorr(centered)
            print(f"Estimated s from autocorrelation (centered data): {s_auto:.2f}")
            s_block = find_s_from_block_averaging(centered)
            print(f"Estimated s from block averaging (centered data): {s_block:.2f}")
    finally:
        if args.verbose:
            logger.removeHandler(handler)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())