from __future__ import annotations

import string

import pytest
from hypothesis import given, strategies as st

from alphabet_and_permutation import Alphabet
from errors import ConfigError, RangeError, SymbolLookupError

SYMBOLS = string.ascii_letters + string.digits + "!?#/^{}<>"


@st.composite
def alphabets(draw):
    chars = draw(st.lists(st.sampled_from(SYMBOLS), unique=True, max_size=40))
    return Alphabet("".join(chars))


def test_sizes():
    assert Alphabet("").size() == 0
    assert Alphabet().size() == 26
    assert Alphabet("!").size() == 1
    assert len(Alphabet("3BbcD/")) == 6


def test_contains():
    upper = Alphabet()
    assert upper.contains("K")
    assert not upper.contains("a")
    assert "3" in Alphabet("3BbcD/")
    assert "\\" not in Alphabet("3BbcD/")
    assert 3 not in upper


def test_to_symbol_and_to_index():
    a = Alphabet("3BbcD/")
    assert Alphabet().to_symbol(25) == "Z"
    assert a.to_symbol(2) == "b"
    assert a.to_index("/") == 5
    assert Alphabet("!").to_index("!") == 0


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_to_symbol_out_of_range(index):
    with pytest.raises(RangeError):
        Alphabet("3BbcD/").to_symbol(index)


def test_to_index_missing_symbol():
    with pytest.raises(SymbolLookupError):
        Alphabet().to_index("a")
    # still catchable as the builtin family
    with pytest.raises(LookupError):
        Alphabet().to_index("?")


@pytest.mark.parametrize("chars", ["AB C", "AB\tC", "AB*", "(AB", "AB)", "ABCA", "aa"])
def test_invalid_alphabets(chars):
    with pytest.raises(ConfigError):
        Alphabet(chars)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        Alphabet("AA")


def test_equality_and_iteration():
    assert Alphabet("ABC") == Alphabet(["A", "B", "C"])
    assert Alphabet("ABC") != Alphabet("CBA")
    assert list(Alphabet("XYZ")) == ["X", "Y", "Z"]
    assert str(Alphabet("XYZ")) == "XYZ"


@given(alphabets())
def test_index_symbol_bijection(alpha):
    for i in range(alpha.size()):
        assert alpha.to_index(alpha.to_symbol(i)) == i
    for ch in alpha:
        assert alpha.to_symbol(alpha.to_index(ch)) == ch
