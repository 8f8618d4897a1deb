# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from contextlib import ExitStack
from dataclasses import dataclass
from typing import List, TextIO, Tuple

from config_loader import build_machine, load_config, set_up
from debug import COMPONENTS, Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from utilities import format_groups, preprocess_message, rotor_names

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for the message pipeline."""

    group: int = 5                  # output block size, 0 disables grouping
    normalize: bool = False         # upper-case and drop foreign symbols
    trace: Tuple[str, ...] = ()     # debug components to switch on


# ────────────────────────────────────────────────────────────────────────
#  1. Message stream
# ────────────────────────────────────────────────────────────────────────


def convert_line(machine: Machine, line: str, cfg: Config) -> str:
    """Convert every word on *line*, carrying machine state across words."""
    if cfg.normalize:
        return machine.convert_message(
            preprocess_message(line, machine.alphabet.symbols)
        )
    return "".join(machine.convert_message(word) for word in line.split())


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Run *lines* through *machine*, writing converted lines to *out*.

    A line containing ``*`` is a settings line and reconfigures the
    machine; every other line is a message line. Blank lines before the
    first settings line are skipped.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if "*" in line:
            set_up(machine, line)
            configured = True
            continue
        if not configured:
            if not line.strip():
                continue
            raise ConfigError(f"No settings line before message {line.strip()!r}.")
        out.write(format_groups(convert_line(machine, line, cfg), cfg.group) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="enigma", description="Encrypt or decrypt with a rotor machine"
    )
    p.add_argument("config", metavar="CONFIG", help="Machine configuration (text, or JSON with a .json suffix).")
    p.add_argument("input", metavar="INPUT", nargs="?", help="Settings and messages. Default: standard input.")
    p.add_argument("output", metavar="OUTPUT", nargs="?", help="Converted messages. Default: standard output.")
    p.add_argument("--group", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--normalize", action="store_true", help="Upper-case input and drop symbols outside the alphabet.")
    p.add_argument("--trace", action="append", choices=COMPONENTS, default=[], metavar="COMPONENT",
                   help=f"Log a component to stderr (repeatable): {', '.join(COMPONENTS)}")
    p.add_argument("--log-file", metavar="FILE", help="Also write trace output to FILE.")
    p.add_argument("--list-rotors", action="store_true", help="Print the configured rotor names and exit.")
    return p.parse_args(argv)


def _open(path: str, mode: str, stack: ExitStack) -> TextIO:
    try:
        return stack.enter_context(open(path, mode, encoding="utf-8"))
    except OSError:
        raise ConfigError(f"could not open {path}") from None


def run(args: argparse.Namespace) -> None:
    cfg = Config(group=args.group, normalize=args.normalize, trace=tuple(args.trace))
    if cfg.trace:
        Debug(log_to=args.log_file).enable(*cfg.trace)

    machine = build_machine(load_config(args.config))
    if args.list_rotors:
        print(" ".join(rotor_names(machine)))
        return

    with ExitStack() as stack:
        src = _open(args.input, "r", stack) if args.input else sys.stdin
        dst = _open(args.output, "w", stack) if args.output else sys.stdout
        process(machine, src, dst, cfg)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except EnigmaError as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
