import io

import numpy as np
import pytest

from stochsim.xyz import XyzFrame, read_xyz, write_xyz

POSITIONS = [[0.0, 0.5, 1.25], [2.0, -1.5, 3.125], [0.75, 0.25, -0.5]]
VELOCITIES = [[0.1, -0.2, 0.3], [0.0, 0.0, 1.0], [-0.125, 0.5, 0.25]]


def _written(alat=4.05):
    buf = io.StringIO()
    write_xyz(buf, "Al", POSITIONS, VELOCITIES, alat)
    return buf.getvalue()


def test_header_layout():
    lines = _written(2.5).splitlines()
    assert lines[0] == "3"
    assert lines[1].startswith(
        'Lattice="2.500000 0.0 0.0 0.0 2.500000 0.0 0.0 0.0 2.500000"'
    )
    assert lines[1].endswith('Properties=species:S:1:pos:R:3:vel:R:3 pbc="T T T"')
    assert len(lines) == 2 + len(POSITIONS)


def test_atom_lines_start_with_symbol():
    lines = _written().splitlines()[2:]
    assert all(line.split()[0] == "Al" for line in lines)
    assert all(len(line.split()) == 7 for line in lines)


def test_round_trip():
    frame = read_xyz(io.StringIO(_written(4.05)))
    assert isinstance(frame, XyzFrame)
    assert frame.symbol == "Al"
    assert frame.natoms == len(POSITIONS)
    assert frame.alat == pytest.approx(4.05)
    assert np.allclose(frame.positions, POSITIONS)
    assert np.allclose(frame.velocities, VELOCITIES)


def test_round_trip_empty_frame():
    buf = io.StringIO()
    write_xyz(buf, "Cu", [], [], 3.6)
    frame = read_xyz(io.StringIO(buf.getvalue()))
    assert frame.natoms == 0
    assert frame.alat == pytest.approx(3.6)


def test_write_mismatched_lengths():
    with pytest.raises(ValueError):
        write_xyz(io.StringIO(), "Al", POSITIONS, VELOCITIES[:2], 1.0)


def test_read_bad_count():
    with pytest.raises(ValueError):
        read_xyz(io.StringIO("abc\n" + _written().split("\n", 1)[1]))


def test_read_bad_lattice():
    text = "1\nCell=nothing\nAl 0 0 0 0 0 0\n"
    with pytest.raises(ValueError):
        read_xyz(io.StringIO(text))


def test_read_truncated_atoms():
    lines = _written().splitlines()
    truncated = "\n".join(lines[:-1]) + "\n"
    with pytest.raises(ValueError, match="atom 2"):
        read_xyz(io.StringIO(truncated))


def test_read_missing_velocities():
    lines = _written().splitlines()
    header = "\n".join(lines[:2])
    text = header.replace(lines[0], "1", 1) + "\nAl 1.0 2.0 3.0\n"
    with pytest.raises(ValueError, match="velocities"):
        read_xyz(io.StringIO(text))