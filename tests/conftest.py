from __future__ import annotations

import pytest

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from machine import Machine
from utilities import NAVAL_CONFIG, naval_catalog

UPPER = Alphabet()


@pytest.fixture(autouse=True)
def quiet_debug():
    """Component switches are shared; leave them off for the next test."""
    Debug().reset()
    yield
    Debug().reset()


@pytest.fixture
def upper() -> Alphabet:
    return UPPER


@pytest.fixture
def naval():
    return naval_catalog()


@pytest.fixture
def machine(naval) -> Machine:
    """B Beta III IV I at AXLE, rings AAAA, plugboard (YF) (ZH)."""
    alphabet = naval["I"].alphabet
    m = Machine(alphabet, 5, 3, naval.values())
    m.insert_rotors(["B", "Beta", "III", "IV", "I"])
    m.set_rotors("AXLE")
    m.set_ring_rotors("AAAA")
    m.set_plugboard(Permutation("(YF) (ZH)", alphabet))
    return m


@pytest.fixture
def conf_file(tmp_path):
    path = tmp_path / "default.conf"
    path.write_text(NAVAL_CONFIG, encoding="utf-8")
    return path
