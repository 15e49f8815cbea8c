"""
Standard Description Decoder

Turing (1936) serializes a machine as a string of letters:
    - A: a run of n A's is state number n (after a D)
    - C: a run of n C's is symbol number n (after a D)
    - D: starts a new state number or symbol number
    - L, R, N: head moves (left, right, none)
    - ;: ends one instruction

Example: 'DADDCRDAA;' is "in state 1, reading a blank, write 0, move right, go to
state 2".

Decoding happens in two passes. sd_to_q rewrites the letters into the canonical
form 'q1S0S1Rq2;', and decode splits that form into one Transition per state.
Malformed input raises a DecodeError; nothing is returned for a partial decode.
"""

from collections.abc import Mapping
from typing import NamedTuple
import re

from alphabet import MOVES, symbol_for_number


# Counter states while assembling a number from a letter run
CLOSED = -1
FRESH = 0

QUINTUPLE = re.compile(r'q(\d+)S(\d+)S(\d+)([LRN])q(\d+)')


class DecodeError(ValueError):
    """A standard description that breaks the grammar."""

    reason = 'malformed standard description'

    def __init__(self, char=None, offset=None, detail=None):
        self.char = char
        self.offset = offset
        self.detail = detail
        message = self.reason
        if char is not None:
            message += f': {char!r} at offset {offset}'
        if detail:
            message += f' ({detail})'
        super().__init__(message)


class OrphanStateToken(DecodeError):
    """An 'A' where no state number can start."""

    reason = 'orphan A'


class OrphanSymbolToken(DecodeError):
    """A 'C' where no symbol number can start."""

    reason = 'orphan C'


class UnhandledSequence(DecodeError):
    reason = 'unhandled sequence'


class Transition(NamedTuple):
    """One quintuple. read == '_' matches any symbol."""

    state: int
    read: str
    write: str
    move: str
    next_state: int

    def __str__(self):
        return f'q{self.state} {self.read} -> {self.write} {self.move} q{self.next_state}'


class TransitionTable(Mapping):
    """
    Read-only mapping of state number -> Transition.

    A state defined more than once keeps its last definition. The table keeps
    the canonical string it came from and the transitions in description order.
    """

    def __init__(self, transitions, canonical=''):
        self._transitions = tuple(transitions)
        self._by_state = {t.state: t for t in self._transitions}
        self.canonical = canonical

    def __getitem__(self, state):
        return self._by_state[state]

    def __len__(self):
        return len(self._by_state)

    def __iter__(self):
        return iter(self._by_state)

    def transitions(self):
        return self._transitions

    def __repr__(self):
        return f'{type(self).__name__}({list(self._transitions)!r})'


def sd_to_q(description):
    """
    Convert a standard description to canonical 'q#S#S#Xq#' form.

    Two counters track the letter runs: one for A (state number) and one for
    C (symbol number). Each is CLOSED, FRESH (just opened by a D) or holds the
    run length so far. A character that closes a field is processed again
    against the updated counters. Fields still open at the end are dropped.

    Args:
        description: Standard description string

    Returns:
        Canonical string, e.g. 'q1S0S1Rq2;'

    Raises:
        OrphanStateToken: an A with no state number open
        OrphanSymbolToken: a C with no symbol number open
        UnhandledSequence: any other combination
    """
    state_count = CLOSED
    symbol_count = CLOSED
    out = []

    for offset, c in enumerate(description):
        while True:
            if c == 'A' and symbol_count < 1 and state_count > CLOSED:
                state_count += 1
                symbol_count = CLOSED
            elif c == 'C' and symbol_count > CLOSED and state_count < 1:
                symbol_count += 1
                state_count = CLOSED
            elif state_count == FRESH and symbol_count == FRESH:
                # D followed by neither A nor C: an implicit blank
                out.append('S0')
                state_count = symbol_count = CLOSED
                continue
            elif c == 'A' and state_count == CLOSED:
                raise OrphanStateToken(c, offset)
            elif c == 'C' and symbol_count == CLOSED:
                raise OrphanSymbolToken(c, offset)
            elif state_count > FRESH and symbol_count == CLOSED:
                out.append(f'q{state_count}')
                state_count = CLOSED
                continue
            elif state_count == CLOSED and FRESH < symbol_count < 3:
                out.append(f'S{symbol_count}')
                symbol_count = CLOSED
                continue
            elif state_count == CLOSED and symbol_count == CLOSED:
                if c == 'D':
                    state_count = symbol_count = FRESH
                elif c in MOVES or c == ';':
                    out.append(c)
                else:
                    raise UnhandledSequence(c, offset)
            else:
                raise UnhandledSequence(c, offset)
            break

    return ''.join(out)


def parse_quintuple(record):
    """
    Parse one canonical record ('q1S0S1Rq2') into a Transition.

    Raises:
        UnhandledSequence: if the record is not a quintuple or names an
            unknown symbol number
    """
    match = QUINTUPLE.fullmatch(record)
    if match is None:
        raise UnhandledSequence(detail=f'not a quintuple: {record!r}')

    state, read, write, move, next_state = match.groups()
    try:
        read = symbol_for_number(int(read))
        write = symbol_for_number(int(write))
    except KeyError as e:
        raise UnhandledSequence(detail=f'unknown symbol number in {record!r}') from e

    return Transition(int(state), read, write, move, int(next_state))


def decode(description):
    """
    Decode a standard description into a TransitionTable.

    Args:
        description: Standard description string, e.g.
            'DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;'

    Returns:
        TransitionTable keyed by state number

    Raises:
        DecodeError: (one of its subclasses) on any grammar violation, or when
            a transition goes to a state the description never defines
    """
    canonical = sd_to_q(description)
    transitions = [parse_quintuple(record) for record in canonical.split(';') if record]
    table = TransitionTable(transitions, canonical)

    for t in table.values():
        if t.next_state not in table:
            raise UnhandledSequence(detail=f'q{t.state} goes to undefined state q{t.next_state}')

    return table
