from __future__ import annotations

import logging

import pytest

from debug import COMPONENTS, Debug
from utilities import format_groups, naval_catalog, naval_machine, preprocess_message, rotor_names


def test_preprocess_message():
    assert preprocess_message("From his", "ABCDEFGHIJKLMNOPQRSTUVWXYZ") == "FROMHIS"
    assert preprocess_message("a b!", "AB#") == "A#B"


@pytest.mark.parametrize(
    "msg, block, expected",
    [
        ("", 5, ""),
        ("ABCDE", 5, "ABCDE"),
        ("ABCDEFGHIJKL", 5, "ABCDE FGHIJ KL"),
        ("ABCDEF", 3, "ABC DEF"),
        ("ABCDEF", 0, "ABCDEF"),
    ],
)
def test_format_groups(msg, block, expected):
    assert format_groups(msg, block) == expected


def test_naval_catalog_is_fresh_each_call():
    a, b = naval_catalog(), naval_catalog()
    assert a["I"] is not b["I"]
    assert len(a) == 12


def test_rotor_names_order():
    names = rotor_names(naval_machine())
    assert names[:2] == ["B", "C"]
    assert names[2:4] == ["Beta", "Gamma"]


# ── debug facade ─────────────────────────────────────────────────


def test_debug_components_start_disabled():
    assert not any(Debug().status().values())
    assert set(Debug().status()) == set(COMPONENTS)


def test_debug_switches_are_shared():
    Debug().enable("stepping")
    assert Debug().active("stepping")
    Debug().toggle_global(False)
    assert not Debug().active("stepping")


def test_debug_unknown_component():
    with pytest.raises(ValueError):
        Debug().enable("gearbox")


def test_debug_log_emits_when_enabled(caplog):
    dbg = Debug()
    dbg.enable("machine")
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        dbg.log("machine", "hello")
        dbg.log("rotor", "quiet")
    assert "[MACHINE] hello" in caplog.text
    assert "quiet" not in caplog.text


def test_stepping_trace(caplog):
    Debug().enable("stepping")
    m = naval_machine()
    m.insert_rotors(["B", "Beta", "III", "IV", "I"])
    m.set_rotors("AXLE")
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        m.convert("A")
    assert "positions AXLF" in caplog.text
