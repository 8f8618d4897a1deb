# machine.py  ──────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Dict, List, Optional

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigError, RangeError
from rotor_and_reflector import Rotor

debug = Debug()


class Machine:
    """A complete rotor machine.

    Slot 0 always holds the reflector; slots ``1..num_rotors-1`` run left
    to right, and the rightmost ``pawls`` slots are driven by the ratchet.
    Rotors come from a shared catalog, so reinserting a rotor resets its
    setting and ring.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        catalog = list(all_rotors)
        if num_rotors <= 1 or num_rotors > len(catalog):
            raise ConfigError(
                f"Must use a reasonable number of rotors "
                f"(got {num_rotors}, {len(catalog)} available)."
            )
        if pawls < 0 or pawls >= num_rotors:
            raise ConfigError(
                f"Must use a reasonable number of pawls "
                f"(got {pawls} for {num_rotors} rotors)."
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._all_rotors = catalog

        self._used: List[Rotor] = []
        self.plugboard: Optional[Permutation] = None

    # ── dimensions ──────────────────────────────────────────────
    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def all_rotors(self) -> tuple[Rotor, ...]:
        return tuple(self._all_rotors)

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        """The active rotors, reflector first."""
        return tuple(self._used)

    def positions(self) -> str:
        """Window letters of slots 1..num_rotors-1, left to right."""
        return "".join(
            r.alphabet.to_symbol(r.setting) for r in self._used[1:]
        )

    # ── setup ───────────────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the catalog rotors named in *names*.

        ``names[0]`` must name a reflector. Every selected rotor starts
        at setting and ring 0.
        """
        chosen = self._check_rotors(names)
        for rotor in chosen:
            rotor.set(0)
            rotor.set_ring(0)
        self._used = chosen
        debug.log("machine", f"inserted {[r.name for r in chosen]}")

    def set_rotors(self, setting: str) -> None:
        """Set slots 1.. to the window letters in *setting*."""
        self._check_setting(setting, "Setting")
        for rotor, ch in zip(self._used[1:], setting):
            rotor.set(ch)

    def set_ring_rotors(self, setting: str) -> None:
        """Set the ring offsets of slots 1.. from *setting*."""
        self._check_setting(setting, "Ring setting")
        for rotor, ch in zip(self._used[1:], setting):
            rotor.set_ring(ch)

    def set_plugboard(self, plugboard: Optional[Permutation]) -> None:
        self.plugboard = plugboard
        debug.log("plugboard", f"plugboard {plugboard!r}")

    # ── stepping logic  ─────────────────────────────────────────
    def _advance_rotors(self) -> None:
        """Advance the pawl-driven rotors for one key press.

        The rightmost rotor always steps. A rotor steps when the rotor to
        its right was at a notch, and a rotor sitting on its own notch
        steps together with its left neighbour (the double step), except
        the leftmost pawl rotor, which has no pawl of its own on a notch
        to its left.
        """
        was_at_notch = False
        for i in range(1, self._pawls + 1):
            rotor = self._used[-i]
            if i == 1:
                was_at_notch = rotor.at_notch()
                rotor.advance()
            elif was_at_notch:
                was_at_notch = rotor.at_notch()
                rotor.advance()
            elif rotor.at_notch() and i != self._pawls:
                was_at_notch = True
                rotor.advance()

        if debug.active("stepping"):
            debug.log("stepping", f"positions {self.positions()}")

    # ── encipher one symbol  ────────────────────────────────────
    def convert(self, c: int | str) -> int | str:
        """Convert an index (after advancing) or a whole message string."""
        if isinstance(c, str):
            return self.convert_message(c)
        return self.convert_index(c)

    def convert_index(self, c: int) -> int:
        if not (0 <= c < self.alphabet.size()):
            raise RangeError(
                f"{c} is an invalid index to access in the alphabet."
            )
        if len(self._used) != self._num_rotors:
            raise ConfigError("Rotors must be inserted before converting.")

        self._advance_rotors()

        signal = c
        if self.plugboard is not None:
            signal = self.plugboard.permute(signal)

        for rotor in reversed(self._used):
            signal = rotor.convert_forward(signal)

        for rotor in self._used[1:]:
            signal = rotor.convert_backward(signal)

        if self.plugboard is not None:
            signal = self.plugboard.invert(signal)

        debug.log("machine", f"{c} -> {signal}")
        return signal

    def convert_message(self, msg: str) -> str:
        """Return the encoding/decoding of *msg*, stepping the rotors."""
        self._check_symbols(msg)
        to_index, to_symbol = self.alphabet.to_index, self.alphabet.to_symbol
        return "".join(to_symbol(self.convert_index(to_index(ch))) for ch in msg)

    # ── validation helpers ──────────────────────────────────────
    def _check_rotors(self, names: Sequence[str]) -> List[Rotor]:
        if len(names) != self._num_rotors:
            raise ConfigError(
                f"There must be {self._num_rotors} rotors to insert."
            )

        by_name: Dict[str, List[Rotor]] = {}
        for rotor in self._all_rotors:
            by_name.setdefault(rotor.name, []).append(rotor)

        chosen: List[Rotor] = []
        for i, name in enumerate(names):
            matches = by_name.get(name, [])
            if len(matches) != 1:
                raise ConfigError(f"Only valid rotors may be inserted: {name!r}.")
            if name in names[i + 1:]:
                raise ConfigError(f"There must not be repeated rotors: {name!r}.")
            chosen.append(matches[0])

        if not chosen[0].reflecting():
            raise ConfigError("First rotor must be a reflector.")
        moving = sum(1 for r in chosen if r.rotates())
        if moving != self._pawls:
            raise ConfigError(
                f"There must be {self._pawls} moving rotors to insert "
                f"(got {moving})."
            )
        return chosen

    def _check_setting(self, setting: str, what: str) -> None:
        if not self._used:
            raise ConfigError("Rotors must be inserted before setting them.")
        self.check_window(setting, what)

    def check_window(self, setting: str, what: str = "Setting") -> None:
        """Raise ConfigError unless *setting* fits slots 1..num_rotors-1."""
        if len(setting) != self._num_rotors - 1:
            raise ConfigError(
                f"{what} length must be one less than the number of rotors "
                f"to be used ({self._num_rotors - 1})."
            )
        self._check_symbols(setting)

    def _check_symbols(self, s: str) -> None:
        for ch in s:
            if not self.alphabet.contains(ch):
                raise ConfigError(f"{ch!r} must be in the machine's alphabet.")

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._used) or "-"
        return f"<Machine rotors={names} pawls={self._pawls}>"
