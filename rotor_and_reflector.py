# rotor_and_reflector.py
from __future__ import annotations

from alphabet_and_permutation import Alphabet, Permutation, wrap
from debug import Debug
from errors import ConfigError, RangeError

debug = Debug()


class Rotor:
    """A wired wheel: a permutation seen through a rotating contact ring.

    ``setting`` is the rotational offset and ``ring`` the offset of the
    wiring core relative to the alphabet ring. The base class neither
    moves nor reflects; subclasses switch those capabilities on.
    """

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name
        self.permutation = perm
        self.setting = 0
        self.ring = 0

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    @property
    def size(self) -> int:
        return self.permutation.size()

    # ── capabilities ──────────────────────────────────────────────
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    def at_notch(self) -> bool:
        return False

    def advance(self) -> None:
        """Advance one position, if possible. By default, does nothing."""

    # ── setting & ring helpers ────────────────────────────────────
    def set(self, posn: int | str) -> None:
        self.setting = self._position(posn, "position")

    def set_ring(self, posn: int | str) -> None:
        self.ring = self._position(posn, "ring position")

    def _position(self, posn: int | str, what: str) -> int:
        if isinstance(posn, str):
            return self.alphabet.to_index(posn)
        if not (0 <= posn < self.size):
            raise RangeError(f"{posn} is an invalid {what} for {self}")
        return posn

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        if not (0 <= p < self.size):
            raise RangeError(f"{p} is an invalid input to convert forward.")
        offset = self.setting - self.ring
        return wrap(self.permutation.permute(p + offset) - offset, self.size)

    def convert_backward(self, e: int) -> int:
        if not (0 <= e < self.size):
            raise RangeError(f"{e} is an invalid input to convert backward.")
        offset = self.setting - self.ring
        return wrap(self.permutation.invert(e + offset) - offset, self.size)

    # ── niceties --------------------------------------------------
    def __str__(self) -> str:
        return f"Rotor {self.name}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pos={self.setting} ring={self.ring}>"


class FixedRotor(Rotor):
    """A rotor with no ratchet: it never advances on its own."""

    def __str__(self) -> str:
        return f"Fixed {super().__str__()}"


class MovingRotor(Rotor):
    """A rotor driven by a pawl, with notches at the given symbols."""

    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        for notch in notches:
            if not self.alphabet.contains(notch):
                raise ConfigError(
                    f"Notch {notch!r} of {name} must be in the permutation's alphabet."
                )
        self.notches = notches
        self._notch_positions = frozenset(
            self.alphabet.to_index(n) for n in notches
        )

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self.setting in self._notch_positions

    def advance(self) -> None:
        self.setting = (self.setting + 1) % self.size
        debug.log("rotor", f"{self.name} -> {self.alphabet.to_symbol(self.setting)}")


class Reflector(FixedRotor):
    """A non-moving rotor whose wiring must have no fixed points."""

    def __init__(self, name: str, perm: Permutation) -> None:
        if not perm.derangement():
            raise ConfigError(
                f"Reflector {name}'s permutation must be a derangement."
            )
        super().__init__(name, perm)

    def reflecting(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"Reflector {self.name}"
