# stochsim

Building blocks for stochastic simulation in physics, on top of NumPy:

- **Monte Carlo integration** of `x(1 - x)` over `[0, 1]`, with and without
  importance sampling (`stochsim.mcint`).
- **Metropolis MCMC** in three dimensions with the weight `exp(-r²)`,
  including step-size tuning (`stochsim.mcmc`).
- **Statistical inefficiency** of correlated series, from the autocorrelation
  function and from block averaging (`stochsim.inefficiency`).
- **Brownian dynamics** of a particle in a harmonic trap using the BD3
  integrator (`stochsim.brownian`).
- **Anharmonic chain** with fixed ends: accelerations, a velocity Verlet step,
  normal-mode transform and mode energies (`stochsim.chain`).
- **Vector helpers** (`stochsim.vectors`) and an **extended XYZ** reader and
  writer (`stochsim.xyz`).

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

```
stochsim-mcint [--seed SEED]
```

Prints plain and importance-sampled estimates of the integral and their
distance from the exact value 1/6 for N = 10, 100, 1000 and 10000 samples.
The seed defaults to 0.

```
stochsim-mcmc [--seed SEED] [--delta DELTA] [--steps STEPS]
              [--warmup WARMUP] [--batch BATCH] [--target TARGET]
```

Starting at the origin, runs `--warmup` warm-up steps (default 1000) of
`--batch` moves each (default 100), growing the step size by 10 % when the
acceptance ratio is more than 0.05 above `--target` (default 0.5) and
shrinking it by 10 % when it is more than 0.05 below. Each warm-up step is
printed. It then averages `x² + x²y² + x²y²z²` over `--steps` moves (default
10000) and prints the final step size, acceptance ratio and estimate. The
seed defaults to 12345.

```
stochsim-inefficiency [PATH] [--count COUNT] [--doubling] [--verbose]
```

Reads `--count` numbers (default 1000000) from `PATH` (default `MC.txt`),
prints their length, mean and variance, centres them, and prints two
estimates of the statistical inefficiency `s`:

- by default, `1/2 + 2 Σ Φ_k` summed until the autocorrelation falls below
  `exp(-2)`, and a smoothed block-averaging estimate with block sizes in
  steps of 40;
- with `--doubling`, the first lag at which the autocorrelation reaches
  `exp(-2)`, and a block-averaging estimate with doubling block sizes.

`--verbose` also prints the estimate for every block size tried. The command
exits with status 1 if the file cannot be opened or holds too few numbers.

```
stochsim-brownian [--output-dir DIR] [--seed SEED] [--steps STEPS] [--csv]
```

Runs four trajectories from rest, for two damping rates and two time steps,
and writes `le_hdt.txt`, `le_ldt.txt`, `he_hdt.txt` and `he_ldt.txt`, each
holding tab-separated `time position velocity` lines after a 10 % burn-in.
`--steps` defaults to 100000 and the seed to 12345. With `--csv` it instead
writes `00.csv` to `11.csv`, each with an `x,v,t` header and 1000 samples;
for these, every BD3 step starts again from the particle at rest.

## Library use

Every function that draws random numbers takes a `numpy.random.Generator`.

```python
import numpy as np

from stochsim.mcint import mc_with_importance_sampling, mc_without_importance_sampling
from stochsim.mcmc import estimate_integral, tune_delta
from stochsim.inefficiency import block_average, find_s_from_autocorr

rng = np.random.default_rng(12345)

plain = mc_without_importance_sampling(10_000, rng)
weighted = mc_with_importance_sampling(10_000, rng)
print(plain.integral, plain.error)
print(weighted.integral, weighted.error)

position, delta, history = tune_delta((0.0, 0.0, 0.0), 1.0, rng)
integral, ratio, position = estimate_integral(position, delta, rng, steps=10_000)

data = rng.normal(size=100_000)
print(find_s_from_autocorr(data - data.mean()))
print(block_average(data, 100))
```

A single Metropolis move is `mcmc_step_displace_all(x, delta, rng)`; it
leaves `x` untouched and returns a `StepResult` with the new `position`, its
`weight` and `function_value`, and whether the move was `accepted`.

Brownian dynamics, one step at a time:

```python
from stochsim.brownian import OscillatorState, bd3_step

state = OscillatorState(position=0.0, velocity=0.0)
state = bd3_step(state, w0=19.477, dt=0.001, eta=1 / 147.3e-3,
                 kb=1.380649e-8, mass=3.0134e-5, temperature=297.0, rng=rng)
```

Chain dynamics and normal modes:

```python
from stochsim.chain import (
    calculate_acceleration,
    calculate_normal_mode_energies,
    velocity_verlet_one_step,
)

positions = np.zeros(32)
positions[0] = 0.1
velocities = np.zeros(32)
accelerations = calculate_acceleration(positions, alpha=0.01)
accelerations, positions, velocities = velocity_verlet_one_step(
    accelerations, positions, velocities, alpha=0.01, timestep=0.1
)
energies = calculate_normal_mode_energies(positions, velocities)
```

Extended XYZ frames of a single species:

```python
import io

from stochsim.xyz import read_xyz, write_xyz

buffer = io.StringIO()
write_xyz(buffer, "Al", [[0.0, 0.0, 0.0]], [[0.1, 0.0, 0.0]], alat=4.05)
buffer.seek(0)
frame = read_xyz(buffer)
print(frame.symbol, frame.natoms, frame.alat)
```

Invalid input, such as vectors of different lengths, an out-of-range lag or
block size, or a malformed XYZ frame, raises `ValueError`.

## What this package does not do

It has no spectral analysis: there is no power spectrum or FFT frequency
helper, so spectra of the trajectories it writes have to be computed with
other tools. It draws no plots.