"""
Tests for decoding standard descriptions.
"""

import pytest

from standard_description import (
    DecodeError,
    OrphanStateToken,
    OrphanSymbolToken,
    Transition,
    TransitionTable,
    UnhandledSequence,
    decode,
    sd_to_q,
)


ALTERNATOR = "DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;"


def test_single_instruction_canonical_form():
    assert sd_to_q("DADDCRDAA;") == "q1S0S1Rq2;"


def test_alternator_canonical_form():
    assert sd_to_q(ALTERNATOR) == "q1S0S1Rq2;q2S0S0Rq3;q3S0S2Rq4;q4S0S0Rq1;"


def test_symbol_runs_and_left_move():
    assert sd_to_q("DADCCDCRDA;") == "q1S2S1Rq1;"
    assert sd_to_q("DADDCCLDA;") == "q1S0S2Lq1;"


def test_fields_left_open_at_end_are_dropped():
    assert sd_to_q("DADDCRDA") == "q1S0S1R"


def test_decode_alternator():
    table = decode(ALTERNATOR)
    assert isinstance(table, TransitionTable)
    assert sorted(table) == [1, 2, 3, 4]
    assert table[1] == Transition(1, '_', '0', 'R', 2)
    assert table[2] == Transition(2, '_', '_', 'R', 3)
    assert table[3] == Transition(3, '_', '1', 'R', 4)
    assert table[4] == Transition(4, '_', '_', 'R', 1)
    assert table.canonical == "q1S0S1Rq2;q2S0S0Rq3;q3S0S2Rq4;q4S0S0Rq1;"


def test_decode_is_deterministic():
    assert decode(ALTERNATOR) == decode(ALTERNATOR)
    assert decode(ALTERNATOR).transitions() == decode(ALTERNATOR).transitions()


def test_decode_empty_description():
    table = decode("")
    assert len(table) == 0
    assert table.canonical == ""


def test_later_definition_of_a_state_wins():
    table = decode("DADDCRDA;DADDRDA;")
    assert len(table) == 1
    assert table[1].write == '_'
    assert len(table.transitions()) == 2


@pytest.mark.parametrize("description", ["C", "CDA;", "DADDCRDAA;C"])
def test_orphan_c(description):
    with pytest.raises(OrphanSymbolToken):
        decode(description)


def test_orphan_c_reports_position():
    with pytest.raises(OrphanSymbolToken) as excinfo:
        sd_to_q("C")
    assert excinfo.value.char == 'C'
    assert excinfo.value.offset == 0
    assert 'orphan C' in str(excinfo.value)


@pytest.mark.parametrize("description", ["A", "DCA", "DADDCRA"])
def test_orphan_a(description):
    with pytest.raises(OrphanStateToken):
        decode(description)


@pytest.mark.parametrize("description", [
    "DCCC;",            # symbol number 3
    "X",                # not a letter of the notation
    "DADDCRDA",         # record without a terminator
    "DADDCRDAA;",       # goes to a state that is never defined
    "LDA;",             # move with no quintuple around it
])
def test_unhandled_sequences(description):
    with pytest.raises(UnhandledSequence):
        decode(description)


def test_decode_errors_are_value_errors():
    assert issubclass(DecodeError, ValueError)
    for cls in (OrphanStateToken, OrphanSymbolToken, UnhandledSequence):
        assert issubclass(cls, DecodeError)


def test_table_is_read_only():
    table = decode(ALTERNATOR)
    with pytest.raises(TypeError):
        table[1] = Transition(1, '1', '1', 'N', 1)
