"""
Turing Machine Simulator for standard descriptions

A decoded TransitionTable holds one quintuple per state:
    (state, read, write, move, next_state)

Execution semantics:
    - The tape is fixed-length; the head starts at position 0 in state 1
    - If the symbol under the head matches `read` (or `read` is the blank,
      which matches anything), `write` is written and the machine goes to
      `next_state`
    - Otherwise nothing is written and the machine stays in the same state
    - Either way the head moves ('L' -1, 'R' +1, 'N' stays)
    - The machine halts when the head leaves the tape

There is no halt state. A table that keeps the head on the tape runs forever
unless max_steps is given.
"""

import numpy as np

from alphabet import MOVES, SYMBOLS, WILDCARD, number_for_symbol


ENTRY_STATE = 1


def compile_transition(transition):
    """
    Turn a Transition into a step function.

    Args:
        transition: Transition (state, read, write, move, next_state)

    Returns:
        step(tape, position) -> (next_state, next_position, written) or None
        once the head is off the tape. `written` is the symbol written, or None
        when the symbol under the head did not match. The tape (a list) is
        modified in place.
    """
    state, expected, write_symbol, move, next_state = transition
    offset = MOVES[move]

    def step(tape, position):
        if not 0 <= position < len(tape):
            return None

        read_symbol = tape[position]
        next_position = position + offset

        if read_symbol != expected and expected != WILDCARD:
            return state, next_position, None

        tape[position] = write_symbol
        return next_state, next_position, write_symbol

    return step


def compile_table(table):
    """Compile every transition of a TransitionTable. Returns {state: step}."""
    return {state: compile_transition(t) for state, t in table.items()}


def run_machine(table, tape, max_steps=None, verbose=False, record_history=True):
    """
    Run a decoded machine on a tape.

    Args:
        table: TransitionTable from standard_description.decode
        tape: Tape string over '_', '0', '1'
        max_steps: Maximum steps before forced stop (None for unlimited)
        verbose: If True, print each step
        record_history: If True, collect every fired quintuple

    Returns:
        Tuple of (final_tape, steps_taken, history, halted)
        where history is a list of 5-tuples (state, read, write, move, next_state)
        with write None for a non-matching scan, and halted is True if the head
        left the tape (False if max_steps stopped the run)

    Raises:
        ValueError: if the tape has a character outside the tape alphabet, or
            is non-empty and the table has no entry state
    """
    cells = string_to_tape(tape)
    if cells and ENTRY_STATE not in table:
        raise ValueError(f"Table has no entry state q{ENTRY_STATE}")

    steps_by_state = compile_table(table)
    state = ENTRY_STATE
    position = 0
    steps = 0
    history = []
    halted = False

    if verbose:
        print(f"Starting Turing Machine simulation")
        print(f"Tape length: {len(cells)}, Program has {len(table)} states")
        print("-" * 60)

    while True:
        if not 0 <= position < len(cells):
            halted = True
            break
        if max_steps is not None and steps >= max_steps:
            if verbose:
                print(f"\nReached maximum steps ({max_steps}), stopping.")
            break

        read_symbol = cells[position]
        next_state, next_position, written = steps_by_state[state](cells, position)
        move = table[state].move

        if record_history:
            history.append((state, read_symbol, written, move, next_state))

        if verbose:
            write_display = repr(written) if written is not None else "(no write)"
            print(f"Step {steps + 1}: State=q{state}, Pos={position}, Read={read_symbol!r} -> "
                  f"Write={write_display}, Move={move}, Next=q{next_state}")

        state, position = next_state, next_position
        steps += 1

    if halted and verbose:
        print(f"\nHead left the tape at position {position} after {steps} steps.")

    return tape_to_string(cells), steps, history, halted


def run(table, tape, max_steps=None, verbose=False):
    """
    Run a decoded machine from state 1, position 0 and return the final tape.

    Example:
        run(decode('DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;'), '_' * 6)
        -> '0_1_0_'
    """
    final_tape, _, _, _ = run_machine(table, tape, max_steps=max_steps, verbose=verbose,
                                      record_history=False)
    return final_tape


def string_to_tape(input_string):
    """
    Convert a tape string to a list of cells.

    Raises:
        ValueError: on a character that is not '_', '0' or '1'
    """
    cells = list(input_string)
    for pos, symbol in enumerate(cells):
        if symbol not in SYMBOLS:
            raise ValueError(f"Invalid tape symbol {symbol!r} at position {pos}; "
                             f"expected one of {''.join(SYMBOLS)!r}")
    return cells


def tape_to_string(tape):
    """Convert a list of cells back to a tape string."""
    return ''.join(tape)


def history_to_numpy(history, state_encoding=None, symbol_encoding=None):
    """
    Convert execution history to a numpy array of shape (n_steps, 5).

    Args:
        history: List of 5-tuples from run_machine
        state_encoding: Optional dict mapping state numbers to integers.
                        If None, state numbers are used as they are.
        symbol_encoding: Optional dict mapping tape symbols to integers.
                         If None, symbol numbers are used (_=0, 0=1, 1=2).

    Returns:
        Tuple of (array, state_encoding, symbol_encoding) where array has
        columns [state, read, write, move, next_state]

    Encoding:
        - Write column: -1 indicates no write (symbol did not match)
        - Move: L=0, R=1, N=2
    """
    if state_encoding is None:
        all_states = set()
        for curr, _, _, _, nxt in history:
            all_states.add(curr)
            all_states.add(nxt)
        state_encoding = {state: state for state in sorted(all_states)}

    if symbol_encoding is None:
        symbol_encoding = {sym: number_for_symbol(sym) for sym in SYMBOLS}

    move_encoding = {'L': 0, 'R': 1, 'N': 2}

    arr = np.zeros((len(history), 5), dtype=np.int16)
    for i, (curr_state, read, write, move, next_state) in enumerate(history):
        arr[i, 0] = state_encoding[curr_state]
        arr[i, 1] = symbol_encoding[read]
        arr[i, 2] = symbol_encoding[write] if write is not None else -1
        arr[i, 3] = move_encoding[move]
        arr[i, 4] = state_encoding[next_state]

    return arr, state_encoding, symbol_encoding


def save_history_to_file(history, filepath, state_encoding=None):
    """
    Save execution history to a .npy file.

    Returns:
        The state_encoding dict used
    """
    arr, encoding, _ = history_to_numpy(history, state_encoding)
    np.save(filepath, arr)
    return encoding


def visualize_tape(tape, head=None):
    """
    Print a visual representation of the tape.

    Args:
        tape: Tape string
        head: Optional head position to highlight
    """
    if not tape:
        print("Empty tape")
        return

    print("Position:", end=" ")
    for pos in range(len(tape)):
        print(f"{pos:^3}", end="")
    print()

    print("   Value:", end=" ")
    for pos, symbol in enumerate(tape):
        if head is not None and pos == head:
            print(f"[{symbol}]", end="")
        else:
            print(f" {symbol} ", end="")
    print()


if __name__ == "__main__":
    from standard_description import decode

    ALTERNATOR = "DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;"

    print("=" * 60)
    print("TURING MACHINE SIMULATOR")
    print("=" * 60)
    print(f"\nStandard description: {ALTERNATOR}")

    table = decode(ALTERNATOR)
    print(f"Canonical form: {table.canonical}")
    for t in table.transitions():
        print(f"  {t}")

    tape, steps, history, halted = run_machine(table, "_" * 12, verbose=True)
    visualize_tape(tape)

    print("\nHistory as numpy array:")
    print("  [state, read, write, move, next_state]")
    print(history_to_numpy(history)[0])
