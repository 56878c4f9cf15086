"""Tests for frame application against rotor and accumulator."""

import pytest

from prt7.accumulator import Accumulator
from prt7.frames import LoadFrame, MapFrame, apply_frame
from prt7.parser import parse_line
from prt7.rotor import Rotor


@pytest.fixture
def rotor():
    return Rotor()


@pytest.fixture
def accumulator():
    return Accumulator()


def test_load_frame_appends_mapped_character(rotor, accumulator):
    trace = apply_frame(LoadFrame("B"), rotor, accumulator)
    assert accumulator.render_plain() == "B"
    assert trace == "Fragment 'B' decoded as 'B'. Message: [B]"


def test_map_frame_rotates_and_reports_head(rotor, accumulator):
    trace = apply_frame(MapFrame(3), rotor, accumulator)
    assert rotor.head_symbol() == "D"
    assert len(accumulator) == 0
    assert trace == "ROTATING ROTOR +3. ('A' now maps to 'D')"


def test_map_frame_trace_sign(rotor, accumulator):
    assert "ROTATING ROTOR -1." in apply_frame(MapFrame(-1), rotor, accumulator)
    assert "ROTATING ROTOR +0." in apply_frame(MapFrame(0), rotor, accumulator)
    assert rotor.head_symbol() == "Z"


def test_rotate_then_load_decodes_to_new_head(rotor, accumulator):
    apply_frame(parse_line("M,+3"), rotor, accumulator)
    trace = apply_frame(parse_line("L,A"), rotor, accumulator)
    assert accumulator.render_plain() == "D"
    assert trace == "Fragment 'A' decoded as 'D'. Message: [D]"


def test_space_passes_through_rotor(rotor, accumulator):
    rotor.rotate(9)
    apply_frame(parse_line("L,Space"), rotor, accumulator)
    assert accumulator.render_plain() == " "


def test_trace_shows_all_fragments_so_far(rotor, accumulator):
    apply_frame(LoadFrame("H"), rotor, accumulator)
    trace = apply_frame(LoadFrame("I"), rotor, accumulator)
    assert trace.endswith("Message: [H][I]")


def test_unknown_frame_type(rotor, accumulator):
    with pytest.raises(TypeError):
        apply_frame("L,A", rotor, accumulator)  # type: ignore[arg-type]
