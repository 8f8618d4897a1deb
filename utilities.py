# utilities.py
from __future__ import annotations

from typing import Dict, List

from config_loader import build_catalog, build_machine, parse_config
from machine import Machine
from rotor_and_reflector import Rotor

# ────────────────────────────────────────────────────────────────────────
#  0. Text preprocessing & formatting
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str) -> str:
    """Upper‑case, replace spaces (→ '#') if supported, and drop non‑alphabet chars."""
    text = msg.upper()
    text = text.replace(" ", "#" if "#" in alpha else "")
    return "".join(ch for ch in text if ch in alpha)


def format_groups(msg: str, block: int = 5) -> str:
    """Split *msg* into space separated groups of *block* symbols."""
    if block <= 0:
        return msg
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────

# Naval rotors I–VIII, thin wheels Beta/Gamma and thin reflectors B/C.
NAVAL_CONFIG = """\
ABCDEFGHIJKLMNOPQRSTUVWXYZ
5 3
 I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
 VI MZM    (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
 VII MZM   (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
 VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
 Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
 Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
 B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
           (RX) (SZ) (TV)
 C R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
           (QZ) (SX) (UY)
"""


def naval_catalog() -> Dict[str, Rotor]:
    """Fresh naval wheels keyed by name; callers may mutate them freely."""
    return {r.name: r for r in build_catalog(parse_config(NAVAL_CONFIG))}


def naval_machine() -> Machine:
    """A 5-slot, 3-pawl machine over the naval wheel set."""
    return build_machine(parse_config(NAVAL_CONFIG))


def rotor_names(machine: Machine) -> List[str]:
    """Catalog names grouped reflectors, fixed wheels, moving wheels."""
    def rank(r: Rotor) -> int:
        if r.reflecting():
            return 0
        return 2 if r.rotates() else 1

    return [r.name for r in sorted(machine.all_rotors, key=rank)]


__all__ = [
    "preprocess_message",
    "format_groups",
    "NAVAL_CONFIG",
    "naval_catalog",
    "naval_machine",
    "rotor_names",
]
