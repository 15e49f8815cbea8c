"""
Turing machine playground.

Decode standard descriptions, run them on blank or given tapes, and convert
between machine numbers, base 7 and standard descriptions.

Settings can come from a .env file or the environment:
    TURING_MAX_STEPS: step limit for every run (default: unlimited)
    TURING_VERBOSE:   print each step ('1', 'true' or 'yes')

Usage:
    python playground.py run 'DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;' --blank 40
    python playground.py catalogue machines.yaml
    python playground.py convert mnum-to-base7 31332531173113353111731113322531111731111335317
    python playground.py canonical 'DADDCRDAA;'
"""

from argparse import ArgumentParser
import os
import sys

import yaml
from dotenv import load_dotenv

from alphabet import BLANK, base7_to_mnum, mnum_to_base7, mnum_to_sd, sd_to_mnum
from standard_description import decode, sd_to_q
from turing_machine import run_machine

# Load environment variables from .env file
load_dotenv()

CONVERSIONS = {
    'mnum-to-base7': mnum_to_base7,
    'base7-to-mnum': base7_to_mnum,
    'mnum-to-sd': mnum_to_sd,
    'sd-to-mnum': sd_to_mnum,
}

# Machines from Turing's paper
DEFAULT_MACHINES_YAML = """
machines:
  # Prints 0 and 1 on alternate squares: 0_1_0_1_...
  alternator:
    description: 'DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;'
    blank: 40
  # The same machine, given as a machine number
  alternator by number:
    machine number: '31332531173113353111731113322531111731111335317'
    blank: 40
"""


def blank_tape(length):
    """Return a tape of `length` blank cells."""
    return BLANK * length


def env_max_steps():
    value = os.getenv('TURING_MAX_STEPS')
    return int(value) if value else None


def env_verbose():
    return os.getenv('TURING_VERBOSE', '').strip().lower() in ('1', 'true', 'yes')


def parse_machines_yaml(yaml_string):
    """
    Parse a YAML catalogue of machines.

    Each machine gives either a standard description or a machine number, and
    either a tape string or a number of blank cells.

    Example YAML format:
        machines:
          alternator:
            description: 'DADDCRDAA;DAADDRDAAA;DAAADDCCRDAAAA;DAAAADDRDA;'
            blank: 40
          short:
            machine number: '31332531173113353111731113322531111731111335317'
            tape: '______'

    Args:
        yaml_string: YAML string defining the machines

    Returns:
        List of dicts with keys 'name', 'description' and 'tape'

    Raises:
        ValueError: if a machine has neither a description nor a machine number
    """
    data = yaml.safe_load(yaml_string) or {}
    machines = data.get('machines') or {}

    result = []
    for name, spec in machines.items():
        spec = spec or {}
        description = spec.get('description')
        if description is None and spec.get('machine number') is not None:
            description = mnum_to_sd(str(spec['machine number']))
        if description is None:
            raise ValueError(f"Machine {name!r} has no description or machine number")

        if spec.get('tape') is not None:
            tape = str(spec['tape'])
        else:
            tape = blank_tape(int(spec.get('blank', 0)))

        result.append({'name': str(name), 'description': str(description), 'tape': tape})

    return result


def run_description(description, tape, max_steps=None, verbose=False):
    """Decode and run a description, printing a summary. Returns the final tape."""
    table = decode(description)
    final_tape, steps, _, halted = run_machine(table, tape, max_steps=max_steps,
                                               verbose=verbose, record_history=False)
    print(f"Tape length: {len(tape)}")
    print(final_tape)
    status = "halted (head left the tape)" if halted else "stopped at max steps"
    print(f"Steps: {steps}, {status}")
    return final_tape


def build_parser():
    ap = ArgumentParser(description="Decode and run Turing machine standard descriptions.")
    ap.add_argument('-N', '--max-steps', type=int, default=env_max_steps(),
                    help='Stop after this many steps (default: TURING_MAX_STEPS or unlimited)')
    ap.add_argument('-v', '--verbose', action='store_true', default=env_verbose(),
                    help='Print each step (default: TURING_VERBOSE)')
    commands = ap.add_subparsers(dest='command', required=True)

    run_cmd = commands.add_parser('run', help='Run one standard description')
    run_cmd.add_argument('description', help='Standard description, e.g. DADDCRDAA;')
    tape = run_cmd.add_mutually_exclusive_group()
    tape.add_argument('-t', '--tape', help="Initial tape over '_', '0', '1'")
    tape.add_argument('-b', '--blank', type=int, default=40, help='Number of blank cells (default: 40)')

    cat_cmd = commands.add_parser('catalogue', help='Run every machine in a YAML catalogue')
    cat_cmd.add_argument('file', nargs='?', help='YAML file (default: built-in machines)')

    conv_cmd = commands.add_parser('convert', help='Convert between number systems')
    conv_cmd.add_argument('conversion', choices=sorted(CONVERSIONS))
    conv_cmd.add_argument('text')

    can_cmd = commands.add_parser('canonical', help="Print the canonical 'q#S#S#Xq#' form")
    can_cmd.add_argument('description')

    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        if args.command == 'run':
            tape = args.tape if args.tape is not None else blank_tape(args.blank)
            run_description(args.description, tape, args.max_steps, args.verbose)

        elif args.command == 'catalogue':
            if args.file:
                with open(args.file) as f:
                    machines = parse_machines_yaml(f.read())
            else:
                machines = parse_machines_yaml(DEFAULT_MACHINES_YAML)
            for machine in machines:
                print(f"\n{'=' * 60}")
                print(f"{machine['name']}: {machine['description']}")
                print("=" * 60)
                run_description(machine['description'], machine['tape'], args.max_steps, args.verbose)

        elif args.command == 'convert':
            print(CONVERSIONS[args.conversion](args.text))

        elif args.command == 'canonical':
            print(sd_to_q(args.description))

    except ValueError as e:  # DecodeError included
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
