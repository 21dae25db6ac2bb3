"""Reading and writing atoms in the extended XYZ format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import islice
from typing import IO, Sequence

import numpy as np

_LATTICE_RE = re.compile(
    r'Lattice="(\S+) 0\.0 0\.0 0\.0 (\S+) 0\.0 0\.0 0\.0 ([^"\s]+)"'
)
_PROPERTIES = 'Properties=species:S:1:pos:R:3:vel:R:3 pbc="T T T"'


@dataclass
class XyzFrame:
    """One frame of atoms: a species symbol, positions, velocities and cell length."""

    symbol: str
    positions: np.ndarray
    velocities: np.ndarray
    alat: float

    @property
    def natoms(self) -> int:
        return len(self.positions)


def write_xyz(
    fp: IO[str],
    symbol: str,
    positions: Sequence[Sequence[float]],
    velocities: Sequence[Sequence[float]],
    alat: float,
) -> None:
    """Write one frame of atoms of a single species to a text stream."""
    pos = np.asarray(positions, dtype=float).reshape(-1, 3)
    vel = np.asarray(velocities, dtype=float).reshape(-1, 3)
    if len(pos) != len(vel):
        raise ValueError(
            f"positions and velocities differ in length: {len(pos)} and {len(vel)}"
        )
    fp.write(
        f'{len(pos)}\nLattice="{alat:f} 0.0 0.0 0.0 {alat:f} 0.0 0.0 0.0 {alat:f}" '
    )
    fp.write(_PROPERTIES + "\n")
    for p, v in zip(pos, vel):
        numbers = " ".join(f"{value:f}" for value in (*p, *v))
        fp.write(f"{symbol} {numbers}\n")


def read_xyz(fp: IO[str]) -> XyzFrame:
    """Read one frame written by write_xyz from a text stream."""
    content = fp.read()
    first, _, rest = content.lstrip().partition("\n")
    try:
        natoms = int(first.strip())
    except ValueError:
        raise ValueError("Error reading header line.") from None
    if natoms < 0:
        raise ValueError("Error reading header line.")

    lattice_line, _, body = rest.lstrip().partition("\n")
    match = _LATTICE_RE.match(lattice_line)
    if match is None:
        raise ValueError("Error reading header line.")
    try:
        alat = float(match.group(3))
    except ValueError:
        raise ValueError("Error reading header line.") from None

    tokens = iter(body.split())
    symbol = ""
    positions = np.zeros((natoms, 3))
    velocities = np.zeros((natoms, 3))
    for i in range(natoms):
        chunk = list(islice(tokens, 7))
        if len(chunk) < 4:
            raise ValueError(f"Error reading positions for atom {i}.")
        symbol = chunk[0]
        try:
            positions[i] = [float(t) for t in chunk[1:4]]
        except ValueError:
            raise ValueError(f"Error reading positions for atom {i}.") from None
        if len(chunk) < 7:
            raise ValueError(f"Error reading velocities for atom {i}.")
        try:
            velocities[i] = [float(t) for t in chunk[4:7]]
        except ValueError:
            raise ValueError(f"Error reading velocities for atom {i}.") from None

    return XyzFrame(symbol=symbol, positions=positions, velocities=velocities, alat=alat)