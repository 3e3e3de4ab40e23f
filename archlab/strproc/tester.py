"""Writes the reference output file for the string list exercise."""

from __future__ import annotations

import os
import sys
from collections import deque
from pathlib import Path
from typing import Callable, Iterator, TextIO

from .strlist import StringProcList, StringProcNode

MAX_TYPE = 8
OUTPUT_FILE = "salida.caso.propio.ej1.txt"
_RELEASE = "======================== Libera memoria =======================\n"
_CONCAT_PREFIX = "junta-constelaciones-mision-estrellas:"
_MASK32 = 0xFFFFFFFF

NextType = Callable[[], int]

_STARS = (
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "procyon", "altair", "achenar", "fomalhaut",
)

_CONSTELLATIONS_A = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "cisne", "orion", "centauro", "juno", "hubble", "irazusta", "terra",
    "cassini-huygens", "artemis", "columbia", "kepler", "aqua", "sputnik",
    "insight", "messenger", "osiris", "rex", "chandra", "curiosity",
)

_CONSTELLATIONS_B = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "cisne", "orion", "centauro", "juno", "hubble", "sol", "polaris",
    "rigel", "pollux", "deneb", "adhara", "betelgeuse", "sirio", "procyon",
    "altair", "achenar", "geminis", "pisis", "cefeo", "pavo", "libra", "auriga",
    "sagitario", "pavo", "crux", "cisne", "cefeo", "pavo", "libra", "auriga",
    "sagitario", "pavo", "crux", "cisne", "orion", "centauro", "juno", "hubble",
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario", "pavo",
    "crux", "cisne", "orion", "centauro", "juno", "hubble", "sol", "polaris",
    "rigel", "pollux", "deneb", "adhara", "betelgeuse", "sirio", "cefeo", "pavo",
    "libra", "auriga", "sagitario", "pavo", "crux", "cisne", "luna", "ganimedes",
    "titan", "calisto", "io", "europa", "luna", "oberon", "titania", "rhea",
    "tritón", "encélado", "mimas", "titán", "dione", "luna", "umbriel", "ariel",
    "miranda", "galemede", "apollo 11", "soyuz", "iss", "hubble",
    "cassini-huygens", "juno", "artemis", "chandrayaan-2", "ceres", "vesta",
    "pallas", "hygiea", "iris", "eris", "juno", "hebe", "palas", "victoria",
)


def _glibc_rand(seed: int = 0) -> Iterator[int]:
    """Yield the same numbers as the C library's rand() after srand(seed)."""
    seed &= _MASK32
    if seed == 0:
        seed = 1
    word = seed - (1 << 32) if seed & (1 << 31) else seed
    state = [word]
    for _ in range(1, 31):
        quotient = abs(word) // 127773
        hi = quotient if word >= 0 else -quotient
        lo = word - hi * 127773
        word = 16807 * lo - 2836 * hi
        if word < 0:
            word += 2147483647
        state.append(word)
    window: deque[int] = deque((value & _MASK32 for value in state), maxlen=31)
    for _ in range(3):
        window.append(window[0])
    produced = 34
    while True:
        value = (window[0] + window[-3]) & _MASK32
        window.append(value)
        if produced >= 344:
            yield value >> 1
        produced += 1


def _type_source(next_type: NextType | None) -> NextType:
    if next_type is not None:
        return next_type
    return _glibc_rand(0).__next__


def _fill(lst: StringProcList, names: tuple[str, ...], next_type: NextType) -> None:
    for name in names:
        lst.add_node(next_type() % MAX_TYPE, name)


def _line(out: TextIO, text: str) -> None:
    out.write(text)
    out.write("\n")


def write_case_a(path: str | os.PathLike[str], next_type: NextType | None = None) -> None:
    """Append the list-building part of the report to ``path``."""
    rand = _type_source(next_type)
    with open(path, "a", encoding="utf-8") as out:
        _line(out, "== Ejercicio 1a ==\n")
        _line(out, "Creando lista vacia\n")
        StringProcList()
        _line(out, _RELEASE)
        _line(out, "Creando nodo vacio\n")
        StringProcNode(0, "")
        _line(out, _RELEASE)
        lst = StringProcList()
        _line(out, "Creando lista vacia\n")
        lst.write_to(out)
        out.write("\n")
        _line(out, "Agregando estrellas:\n")
        _fill(lst, _STARS, rand)
        lst.write_to(out)
        out.write("\n")
        _line(out, _RELEASE)
        _line(out, "Creando lista vacia\n")
        lst = StringProcList()
        _line(out, "Agregando constelaciones y misiones:\n")
        _fill(lst, _CONSTELLATIONS_A, rand)
        lst.write_to(out)
        out.write("\n")
        _line(out, _RELEASE)
        out.write("======================== Fin del test 1a =======================")


def write_case_b(path: str | os.PathLike[str], next_type: NextType | None = None) -> None:
    """Append the concatenation part of the report to ``path``."""
    rand = _type_source(next_type)
    with open(path, "a", encoding="utf-8") as out:
        _line(out, "== Ejercicio 1b ==\n")
        lst = StringProcList()
        _line(out, "Agregando constelaciones y misiones:\n")
        _fill(lst, _CONSTELLATIONS_B, rand)
        for node_type in range(MAX_TYPE):
            out.write(f"{lst.concat(node_type, _CONCAT_PREFIX)}\n")
        out.write("======================== Fin del test 1b =======================")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    path = Path(args[0]) if args else Path(OUTPUT_FILE)
    path.unlink(missing_ok=True)
    rand = _glibc_rand(0).__next__
    write_case_a(path, rand)
    write_case_b(path, rand)
    return 0