"""Command shell of the instruction-level simulator."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

from .memory import MEM_TEXT_START, Memory

ARM_REGS = 32
PROMPT = "ARM-SIM> "
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_SEPARATOR = "-------------------------------------\n"

_HEX_WORD = re.compile(r"[+-]?(?:0[xX](?=[0-9a-fA-F]))?[0-9a-fA-F]+")
_SCAN_I = re.compile(r"([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_SCAN_D = re.compile(r"[+-]?[0-9]+")
_SCAN_X = re.compile(r"([+-]?)(?:0[xX])?([0-9a-fA-F]+)")

_HELP = (
    "----------------ARM ISIM Help-----------------------\n"
    "go               -  run program to completion         \n"
    "run n            -  execute program for n instructions\n"
    "mdump low high   -  dump memory from low to high      \n"
    "rdump            -  dump the register & bus values    \n"
    "input reg_no reg_value - set GPR reg_no to reg_value  \n"
    "?                -  display this help menu            \n"
    "quit             -  exit the program                  \n\n"
)


def _to_int64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value & (1 << 63) else value


def _scan_i(text: str) -> int:
    match = _SCAN_I.fullmatch(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif len(digits) > 1:
        value = int(digits[1:], 8)
    else:
        value = int(digits, 10)
    return -value if sign == "-" else value


def _scan_d(text: str) -> int:
    if _SCAN_D.fullmatch(text) is None:
        raise ValueError(f"not a decimal integer: {text!r}")
    return int(text, 10)


def _scan_x(text: str) -> int:
    match = _SCAN_X.fullmatch(text)
    if match is None:
        raise ValueError(f"not a hexadecimal integer: {text!r}")
    sign, digits = match.groups()
    value = int(digits, 16)
    return -value if sign == "-" else value


@dataclass
class CpuState:
    """Program counter, register file and condition flags."""

    pc: int = 0
    regs: list[int] = field(default_factory=lambda: [0] * ARM_REGS)
    flag_n: int = 0
    flag_z: int = 0

    def copy(self) -> CpuState:
        return CpuState(self.pc, list(self.regs), self.flag_n, self.flag_z)


class SimulatorExit(Exception):
    """Raised when the simulator ends, carrying the exit status."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


Executor = Callable[["Simulator"], None]


class Simulator:
    """Holds machine state and runs the executor one instruction at a time.

    The executor reads ``current_state`` and memory, writes ``next_state``
    and clears ``running`` to halt the machine. Without an executor each
    cycle only latches the next state.
    """

    def __init__(
        self,
        memory: Memory | None = None,
        out: TextIO | None = None,
        dump_file: TextIO | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.memory = memory if memory is not None else Memory()
        self.out = out if out is not None else sys.stdout
        self.dump_file = dump_file
        self.executor = executor
        self.current_state = CpuState()
        self.next_state = CpuState()
        self.running = True
        self.instruction_count = 0

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _write_both(self, text: str) -> None:
        self.out.write(text)
        if self.dump_file is not None:
            self.dump_file.write(text)

    def load_program(self, path: str | Path) -> int:
        """Load hexadecimal words into text memory; return how many were read."""
        try:
            text = Path(path).read_text()
        except OSError:
            self._write(f"Error: Can't open program file {path}\n")
            raise SimulatorExit(-1) from None
        words = 0
        pos = 0
        while True:
            while pos < len(text) and text[pos].isspace():
                pos += 1
            if pos >= len(text):
                break
            match = _HEX_WORD.match(text, pos)
            if match is None:
                self._write(f"Error: Malformed program file {path}\n")
                raise SimulatorExit(-1)
            value = _scan_x(match.group()) & _MASK32
            self.memory.write_32(MEM_TEXT_START + 4 * words, value)
            words += 1
            pos = match.end()
        self.current_state.pc = MEM_TEXT_START
        self.next_state = self.current_state.copy()
        self._write(f"Read {words} words from program into memory.\n\n")
        return words

    def cycle(self) -> None:
        """Execute one instruction and latch the next state."""
        if self.executor is not None:
            self.executor(self)
        self.current_state = self.next_state.copy()
        self.instruction_count += 1

    def run(self, num_cycles: int) -> None:
        """Execute up to ``num_cycles`` instructions."""
        if not self.running:
            self._write("Can't simulate, Simulator is halted\n\n")
            return
        self._write(f"Simulating for {num_cycles} cycles...\n\n")
        for _ in range(num_cycles):
            if not self.running:
                self._write("Simulator halted\n\n")
                break
            self.cycle()

    def go(self) -> None:
        """Execute until the machine halts."""
        if not self.running:
            self._write("Can't simulate, Simulator is halted\n\n")
            return
        self._write("Simulating...\n\n")
        while self.running:
            self.cycle()
        self._write("Simulator halted\n\n")

    def mdump(self, start: int, stop: int) -> None:
        """Dump the words from ``start`` to ``stop`` inclusive."""
        lines = [
            f"\nMemory content [0x{start & _MASK32:08x}..0x{stop & _MASK32:08x}] :\n",
            _SEPARATOR,
        ]
        for address in range(start, stop + 1, 4):
            word = self.memory.read_32(address & _MASK64)
            lines.append(f"  0x{address & _MASK32:08x} ({address}) : 0x{word:x}\n")
        lines.append("\n")
        self._write_both("".join(lines))

    def rdump(self) -> None:
        """Dump the instruction count, program counter, registers and flags."""
        state = self.current_state
        lines = [
            "\nCurrent register/bus values :\n",
            _SEPARATOR,
            f"Instruction Count : {self.instruction_count}\n",
            f"PC                : 0x{state.pc & _MASK64:x}\n",
            "Registers:\n",
        ]
        lines.extend(f"X{k}: 0x{value & _MASK64:x}\n" for k, value in enumerate(state.regs))
        lines.append(f"FLAG_N: {state.flag_n}\n")
        lines.append(f"FLAG_Z: {state.flag_z}\n")
        lines.append("\n")
        self._write_both("".join(lines))

    def help(self) -> None:
        self._write(_HELP)

    def set_register(self, register: int, value: int) -> None:
        """Set a register in both the current and the next state."""
        if not 0 <= register < ARM_REGS:
            raise ValueError(f"register X{register} does not exist")
        value = _to_int64(value)
        self.current_state.regs[register] = value
        self.next_state.regs[register] = value

    def command(self, tokens: Iterable[str]) -> None:
        """Prompt, then read and carry out one command from ``tokens``."""
        stream = iter(tokens)
        self._write(PROMPT)
        self.out.flush()
        word = next(stream, None)
        if word is None:
            raise SimulatorExit(0)
        self._write("\n")

        kind = word[:1].lower()
        try:
            if kind == "g":
                self.go()
            elif kind == "m":
                start = _scan_i(next(stream))
                stop = _scan_i(next(stream))
                self.mdump(start, stop)
            elif kind == "?":
                self.help()
            elif kind == "q":
                self._write("Bye.\n")
                raise SimulatorExit(0)
            elif kind == "r":
                if word[1:2].lower() == "d":
                    self.rdump()
                else:
                    self.run(_scan_d(next(stream)))
            elif kind == "i":
                register = _scan_i(next(stream))
                value = _scan_x(next(stream))
                self.set_register(register, value)
            else:
                self._write("Invalid Command\n")
        except (StopIteration, ValueError):
            pass


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout
    if not args:
        out.write("Error: usage: armsim <program_file_1> <program_file_2> ...\n")
        return 1
    out.write("ARM Simulator\n\n")

    sim = Simulator(out=out)
    try:
        for path in args:
            sim.load_program(path)
    except SimulatorExit as exc:
        return exc.code & 0xFF

    try:
        dump_file = open("dumpsim", "w")
    except OSError:
        out.write("Error: Can't open dumpsim file\n")
        return 255

    with dump_file:
        sim.dump_file = dump_file
        tokens = _tokens(sys.stdin)
        try:
            while True:
                sim.command(tokens)
        except SimulatorExit as exc:
            return exc.code & 0xFF