# alphabet_and_permutation.py
from __future__ import annotations

import string
from collections.abc import Iterable, Iterator
from typing import Dict, List

from debug import Debug
from errors import ConfigError, RangeError, SymbolLookupError

debug = Debug()

UPPER = string.ascii_uppercase

# reserved by the configuration and cycle syntax
_RESERVED = frozenset("*()")


def is_symbol(ch: str) -> bool:
    """True for characters that may appear in an alphabet or a cycle."""
    return not ch.isspace() and ch not in _RESERVED


def wrap(p: int, size: int) -> int:
    """Return *p* modulo *size*, always in ``[0, size)``."""
    if size <= 0:
        raise RangeError("cannot wrap into an empty alphabet")
    return p % size


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered set of distinct symbols with a dense index per symbol."""

    def __init__(self, chars: str | Iterable[str] = UPPER) -> None:
        symbols = chars if isinstance(chars, str) else "".join(chars)
        symbol_to_index: Dict[str, int] = {}

        for i, ch in enumerate(symbols):
            if not is_symbol(ch):
                raise ConfigError(
                    f"{ch!r} is an invalid character in the alphabet."
                )
            if ch in symbol_to_index:
                raise ConfigError(f"{ch!r} is repeated in the alphabet.")
            symbol_to_index[ch] = i

        self._symbols: str = symbols
        self._symbol_to_index = symbol_to_index

    @property
    def symbols(self) -> str:
        return self._symbols

    def size(self) -> int:
        return len(self._symbols)

    def contains(self, ch: str) -> bool:
        return ch in self._symbol_to_index

    # symbol → integer signal
    def to_index(self, ch: str) -> int:
        try:
            return self._symbol_to_index[ch]
        except KeyError:
            raise SymbolLookupError(
                f"{ch!r} must be in the alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < self.size()):
            raise RangeError(
                f"{index} is an invalid index to access in the alphabet."
            )
        return self._symbols[index]

    # ── protocol niceties ─────────────────────────────────────────
    def __len__(self) -> int:
        return self.size()

    def __contains__(self, ch: object) -> bool:
        return isinstance(ch, str) and self.contains(ch)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __str__(self) -> str:
        return self._symbols

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A permutation of ``[0, alphabet.size())`` given in cycle notation.

    ``cycles`` looks like ``"(cccc) (cc) ..."``. Symbols that appear in no
    cycle map to themselves, and whitespace between cycles is ignored.
    Both :meth:`permute` and :meth:`invert` accept either an integer index,
    which is wrapped modulo the alphabet size, or a symbol of the alphabet;
    the result has the same type as the argument.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        _check_cycles(cycles, alphabet)
        self._alphabet = alphabet
        self._cycles: List[str] = _split_cycles(cycles)

        # symbol → owning cycle; absent symbols are fixed points
        self._owner: Dict[str, str] = {
            ch: cycle for cycle in self._cycles for ch in cycle
        }
        debug.log("permutation", f"built {self!r}")

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def cycles(self) -> tuple[str, ...]:
        return tuple(self._cycles)

    def size(self) -> int:
        return self._alphabet.size()

    # ── application ───────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        """Apply the permutation to *p*."""
        return self._shift(p, 1)

    def invert(self, c: int | str) -> int | str:
        """Apply the inverse permutation to *c*."""
        return self._shift(c, -1)

    def _shift(self, value: int | str, step: int) -> int | str:
        if isinstance(value, str):
            cycle = self.get_cycle(value)
            if not cycle:
                return value
            return cycle[(cycle.index(value) + step) % len(cycle)]

        index = wrap(value, self.size())
        ch = self._alphabet.to_symbol(index)
        cycle = self._owner.get(ch, "")
        if not cycle:
            return index
        target = cycle[(cycle.index(ch) + step) % len(cycle)]
        return self._alphabet.to_index(target)

    def derangement(self) -> bool:
        """True iff no value maps to itself."""
        return all(
            len(self._owner.get(ch, "")) >= 2 for ch in self._alphabet
        )

    def get_cycle(self, key: int | str) -> str:
        """Return the cycle holding *key* (index or symbol), or ``""``."""
        if isinstance(key, str):
            if not self._alphabet.contains(key):
                raise SymbolLookupError(
                    f"{key!r} must be in the permutation's alphabet."
                )
            return self._owner.get(key, "")

        if not (0 <= key < self.size()):
            raise RangeError(
                f"{key} is an invalid index to access in the alphabet."
            )
        return self._owner.get(self._alphabet.to_symbol(key), "")

    # nicety for debugging
    def __repr__(self) -> str:
        body = " ".join(f"({c})" for c in self._cycles)
        return f"<Permutation {body}>"


# ── cycle-notation helpers ───────────────────────────────────────
def _check_cycles(cycles: str, alphabet: Alphabet) -> None:
    if "()" in cycles:
        raise ConfigError("() is an invalid cycle.")

    is_open = False
    opened = closed = 0
    seen: set[str] = set()

    for ch in cycles:
        if ch == "(":
            if is_open:
                raise ConfigError("A parenthesis was not closed yet.")
            is_open = True
            opened += 1
        elif ch == ")":
            if not is_open:
                raise ConfigError("A parenthesis was not opened yet.")
            is_open = False
            closed += 1
        elif ch == "*":
            raise ConfigError("* is not allowed to be in cycles.")
        elif ch.isspace():
            if is_open:
                raise ConfigError("No whitespace inside cycles.")
        else:
            if not alphabet.contains(ch):
                raise ConfigError(f"{ch!r} in cycles must be in the alphabet.")
            if not is_open:
                raise ConfigError(f"{ch!r} must be inside parentheses.")
            # one symbol may appear once across the whole string
            if ch in seen:
                raise ConfigError(f"{ch!r} is repeated in cycles.")
            seen.add(ch)

    if opened != closed:
        raise ConfigError(
            "Number of open and close parentheses must match in cycles."
        )


def _split_cycles(cycles: str) -> List[str]:
    result: List[str] = []
    for ch in cycles:
        if ch == "(":
            result.append("")
        elif is_symbol(ch):
            result[-1] += ch
    return result
