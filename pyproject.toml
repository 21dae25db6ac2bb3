[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stochsim"
version = "0.1.0"
description = "Monte Carlo integration, MCMC sampling, statistical inefficiency, Brownian dynamics and chain dynamics tools for computational physics"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "monte-carlo",
    "mcmc",
    "metropolis",
    "importance-sampling",
    "statistical-inefficiency",
    "block-averaging",
    "brownian-dynamics",
    "langevin",
    "normal-modes",
    "velocity-verlet",
    "extxyz",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
stochsim-mcint = "stochsim.mcint:main"
stochsim-mcmc = "stochsim.mcmc:main"
stochsim-inefficiency = "stochsim.inefficiency:main"
stochsim-brownian = "stochsim.brownian:main"

[tool.hatch.build.targets.wheel]
packages = ["stochsim"]

[tool.hatch.build.targets.sdist]
include = [
    "stochsim",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
