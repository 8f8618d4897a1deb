# config_loader.py
from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigError
from machine import Machine
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor

debug = Debug()

# kind tag letter → JSON kind name
KINDS = {"M": "moving", "N": "fixed", "R": "reflector"}


# ────────────────────────────────────────────────────────────────────────
#  0. Plain data handed to the cipher core
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class RotorSpec:
    """One catalog entry: name, kind, wiring in cycle notation."""

    name: str
    kind: str                       # "moving" | "fixed" | "reflector"
    cycles: str = ""
    notches: str = ""


@dataclass(slots=True)
class MachineSpec:
    alphabet: str
    num_rotors: int
    pawls: int
    rotors: List[RotorSpec] = field(default_factory=list)


@dataclass(slots=True)
class Settings:
    """A parsed settings line: ``* <names> <setting> [<ring>] [<plugs>]``."""

    rotor_names: List[str]
    setting: str
    ring: Optional[str] = None
    plugboard: str = ""


# ────────────────────────────────────────────────────────────────────────
#  1. Text configuration
# ────────────────────────────────────────────────────────────────────────


class _Tokens:
    """Whitespace tokenizer with one token of lookahead."""

    def __init__(self, text: str) -> None:
        self._it: Iterator[str] = iter(text.split())
        self._peeked: Optional[str] = None

    def peek(self) -> Optional[str]:
        if self._peeked is None:
            self._peeked = next(self._it, None)
        return self._peeked

    def next(self, what: str) -> str:
        tok = self.peek()
        if tok is None:
            raise ConfigError(what)
        self._peeked = None
        return tok


def parse_config(text: str) -> MachineSpec:
    """Parse the text configuration format.

    ::

        ABCDEFGHIJKLMNOPQRSTUVWXYZ
        5 3
        I MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
        B R   (AE) (BN) (CK) ...

    The first token is the alphabet, then the number of rotor slots and
    pawls. Each rotor is a name, a kind tag (``M`` followed by notch
    symbols, ``N`` or ``R``) and every following token that starts with
    ``(``, so a rotor's cycles may run over several lines.
    """
    tokens = _Tokens(text)
    truncated = "Configuration file truncated."

    alphabet = tokens.next(truncated)
    try:
        num_rotors = int(tokens.next(truncated))
        pawls = int(tokens.next(truncated))
    except ValueError:
        raise ConfigError(truncated) from None

    spec = MachineSpec(alphabet, num_rotors, pawls)
    seen: set[str] = set()
    while tokens.peek() is not None:
        rotor = _parse_rotor(tokens)
        if rotor.name in seen:
            raise ConfigError(f"Rotor {rotor.name!r} is described twice.")
        seen.add(rotor.name)
        spec.rotors.append(rotor)

    debug.log("config", f"parsed {len(spec.rotors)} rotors over {alphabet!r}")
    return spec


def _parse_rotor(tokens: _Tokens) -> RotorSpec:
    name = tokens.next("Bad rotor description.")
    _check_rotor_token(name, "name")
    details = tokens.next(f"Bad rotor description for {name!r}.")
    _check_rotor_token(details, "details")

    cycles: List[str] = []
    while (tokens.peek() or "").startswith("("):
        cycles.append(tokens.next(""))

    kind = KINDS.get(details[0])
    if kind is None:
        raise ConfigError(
            f"Rotor {name!r} must be described with 'M', 'N', or 'R'."
        )
    notches = details[1:] if kind == "moving" else ""
    return RotorSpec(name, kind, "".join(cycles), notches)


def _check_rotor_token(tok: str, what: str) -> None:
    if tok.startswith("("):
        raise ConfigError(f"Rotor {what} must not start with '(': {tok!r}")


# ────────────────────────────────────────────────────────────────────────
#  2. JSON configuration & file loading
# ────────────────────────────────────────────────────────────────────────


def parse_json_config(data: dict) -> MachineSpec:
    required = {"alphabet", "num_rotors", "pawls", "rotors"}
    missing = required - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    if not isinstance(data["alphabet"], str):
        raise ConfigError("alphabet must be a string.")
    if not isinstance(data["rotors"], list):
        raise ConfigError("rotors must be a list of rotor entries.")

    rotors: List[RotorSpec] = []
    for entry in data["rotors"]:
        if not isinstance(entry, dict):
            raise ConfigError(f"Rotor entry must be an object, not {entry!r}.")
        lacking = {"name", "kind"} - entry.keys()
        if lacking:
            raise ConfigError(
                f"Missing keys in rotor entry: {', '.join(sorted(lacking))}"
            )
        fields = {
            key: entry.get(key, "")
            for key in ("name", "kind", "cycles", "notches")
        }
        for key, value in fields.items():
            if not isinstance(value, str):
                raise ConfigError(f"Rotor {key} must be a string: {value!r}")
        if fields["kind"] not in KINDS.values():
            raise ConfigError(
                f"Rotor {fields['name']!r} has unknown kind {fields['kind']!r}."
            )
        rotors.append(RotorSpec(**fields))

    try:
        num_rotors, pawls = int(data["num_rotors"]), int(data["pawls"])
    except (TypeError, ValueError):
        raise ConfigError("num_rotors and pawls must be integers.") from None
    return MachineSpec(data["alphabet"], num_rotors, pawls, rotors)


def read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError:
        raise ConfigError(f"could not open {path}") from None


def load_config(path: str | Path) -> MachineSpec:
    """Load a machine description, JSON when the suffix is ``.json``."""
    text = read_text(path)
    if Path(path).suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc.msg})") from None
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        return parse_json_config(data)
    return parse_config(text)


# ────────────────────────────────────────────────────────────────────────
#  3. Building the machine
# ────────────────────────────────────────────────────────────────────────


def build_rotor(spec: RotorSpec, alphabet: Alphabet) -> Rotor:
    perm = Permutation(spec.cycles, alphabet)
    if spec.kind == "moving":
        return MovingRotor(spec.name, perm, spec.notches)
    if spec.kind == "fixed":
        return FixedRotor(spec.name, perm)
    if spec.kind == "reflector":
        return Reflector(spec.name, perm)
    raise ConfigError(f"Rotor {spec.name!r} has unknown kind {spec.kind!r}.")


def build_catalog(spec: MachineSpec, alphabet: Optional[Alphabet] = None) -> List[Rotor]:
    """Fresh rotor objects for *spec*; each call returns new instances."""
    alpha = alphabet if alphabet is not None else Alphabet(spec.alphabet)
    return [build_rotor(r, alpha) for r in spec.rotors]


def build_machine(spec: MachineSpec) -> Machine:
    alphabet = Alphabet(spec.alphabet)
    return Machine(alphabet, spec.num_rotors, spec.pawls, build_catalog(spec, alphabet))


# ────────────────────────────────────────────────────────────────────────
#  4. Settings lines
# ────────────────────────────────────────────────────────────────────────


def parse_settings(line: str, num_rotors: int) -> Settings:
    tokens = line.split()
    if not tokens or tokens[0] != "*":
        raise ConfigError(f"{line.strip()!r} must start with a lone asterisk.")

    truncated = f"Settings line truncated: {line.strip()!r}"
    if len(tokens) < num_rotors + 2:
        raise ConfigError(truncated)

    names = tokens[1:1 + num_rotors]
    setting = tokens[1 + num_rotors]
    _check_rotor_token(setting, "setting")

    rest = tokens[2 + num_rotors:]
    ring: Optional[str] = None
    if rest and not rest[0].startswith("("):
        ring, rest = rest[0], rest[1:]
    return Settings(names, setting, ring, "".join(rest))


def apply_settings(machine: Machine, settings: Settings) -> None:
    """Insert, set, ring-set and plug *machine*, in that order.

    Everything is checked first; a rejected line leaves *machine* as it was.
    """
    plugboard = Permutation(settings.plugboard, machine.alphabet)
    machine.check_window(settings.setting, "Setting")
    if settings.ring is not None:
        machine.check_window(settings.ring, "Ring setting")

    machine.insert_rotors(settings.rotor_names)
    machine.set_rotors(settings.setting)
    if settings.ring is not None:
        machine.set_ring_rotors(settings.ring)
    machine.set_plugboard(plugboard)
    debug.log("config", f"set up {machine!r} at {machine.positions()}")


def set_up(machine: Machine, line: str) -> Settings:
    settings = parse_settings(line, machine.num_rotors)
    apply_settings(machine, settings)
    return settings


__all__ = [
    "RotorSpec",
    "MachineSpec",
    "Settings",
    "parse_config",
    "parse_json_config",
    "load_config",
    "build_rotor",
    "build_catalog",
    "build_machine",
    "parse_settings",
    "apply_settings",
    "set_up",
]
