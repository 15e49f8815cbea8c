"""
Alphabet tables for Turing's standard descriptions.

A Turing machine can be written three ways:
    - standard description: letters A, C, D, L, R, N and ';'
    - machine number: the digits 1-7, one digit per letter
    - base 7: the machine number with every digit lowered by one

The conversions here are plain per-character substitutions. They never fail:
characters outside a table's domain fall back to a fixed replacement.
"""

# Machine-number digit -> standard-description letter
MNUM_TO_SD = {
    '1': 'A',
    '2': 'C',
    '3': 'D',
    '4': 'L',
    '5': 'R',
    '6': 'N',
    '7': ';',
}
SD_TO_MNUM = {letter: digit for digit, letter in MNUM_TO_SD.items()}

# Machine-number digit -> base-7 digit
MNUM_TO_BASE7 = {str(d): str(d - 1) for d in range(1, 8)}
BASE7_TO_MNUM = {b: m for m, b in MNUM_TO_BASE7.items()}

# Tape symbols
BLANK = '_'
ZERO = '0'
ONE = '1'
SYMBOLS = (BLANK, ZERO, ONE)

# Symbol 0 is the blank, and doubles as "match anything" when read
WILDCARD = BLANK

# Symbol number (the length of a C run) -> tape symbol
SYMBOL_NUMBERS = {0: BLANK, 1: ZERO, 2: ONE}

# Head moves -> position offset
MOVES = {'L': -1, 'R': 1, 'N': 0}


def _substitute(text, table, fallback):
    return ''.join(table.get(c, fallback) for c in text)


def mnum_to_base7(text):
    """Convert a machine number to base 7. Non-conforming chars become '0'."""
    return _substitute(text, MNUM_TO_BASE7, '0')


def base7_to_mnum(text):
    """Convert a base-7 string to a machine number. Non-conforming chars become '0'."""
    return _substitute(text, BASE7_TO_MNUM, '0')


def mnum_to_sd(text):
    """Convert a machine number to a standard description. Non-conforming chars become 'N'."""
    return _substitute(text, MNUM_TO_SD, 'N')


def sd_to_mnum(text):
    """Convert a standard description to a machine number. Non-conforming chars become '6' (N)."""
    return _substitute(text, SD_TO_MNUM, '6')


def symbol_for_number(number):
    """
    Look up the tape symbol for a symbol number.

    Args:
        number: Symbol number as an int (0 = blank, 1 = '0', 2 = '1')

    Returns:
        One of '_', '0', '1'

    Raises:
        KeyError: if the number has no symbol
    """
    return SYMBOL_NUMBERS[number]


def number_for_symbol(symbol):
    """Inverse of symbol_for_number."""
    return SYMBOLS.index(symbol)
