"""Tests for the decoded message accumulator."""

from prt7.accumulator import Accumulator


def test_empty_accumulator():
    acc = Accumulator()
    assert len(acc) == 0
    assert acc.render_plain() == ""
    assert acc.render_fragments() == "Message: "


def test_render_plain_keeps_insertion_order():
    acc = Accumulator()
    for c in "HOLA MUNDO":
        acc.append(c)
    assert acc.render_plain() == "HOLA MUNDO"
    assert list(acc) == list("HOLA MUNDO")
    assert len(acc) == 10


def test_render_fragments_brackets_each_character():
    acc = Accumulator()
    for c in "A B":
        acc.append(c)
    assert acc.render_fragments() == "Message: [A][ ][B]"
