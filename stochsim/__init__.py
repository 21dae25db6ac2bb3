"""Monte Carlo integration, Metropolis sampling, statistical inefficiency,
Brownian dynamics, anharmonic chain dynamics, vector helpers and extended XYZ I/O."""

__version__ = "0.1.0"