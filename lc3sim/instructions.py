"""Instruction decoding and execution for the LC-3 simulator."""

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Protocol, TextIO

from .bitvector import BitVector
from .cpu import CPU
from .errors import IllegalOpcode, IllegalTrapVector
from .memory import WORD_BITS


class Opcode(IntEnum):
    """Top four bits of an instruction word."""
    BR = 0
    ADD = 1
    LD = 2
    ST = 3
    AND = 5
    NOT = 9
    TRAP = 15


class TrapVector(IntEnum):
    OUT = 0x21
    HALT = 0x25


class OutputSink(Protocol):
    """Receives characters from the OUT trap, one at a time."""

    def write_char(self, ch: str) -> None:
        ...


class OutputBuffer:
    """Output buffer collecting OUT characters in program order."""

    def __init__(self):
        self._output: list[str] = []
        self.last_out_code: Optional[int] = None

    def write_char(self, ch: str) -> None:
        """Write character to output buffer."""
        self.last_out_code = ord(ch)
        self._output.append(ch)

    def get_output(self) -> str:
        """Get accumulated output as string."""
        return "".join(self._output)

    def reset_io_codes(self) -> None:
        """Reset last I/O code for new instruction."""
        self.last_out_code = None


class ConsoleOutput:
    """Writes OUT characters straight to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def write_char(self, ch: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(ch)
        stream.flush()


@dataclass
class Instruction:
    """Decoded instruction word.

    `pc` is the incremented PC, the base for PC-relative offsets.
    Field accessors follow the MSB-first [start, start + length) layout.
    """
    opcode: Opcode
    word: BitVector
    pc: int

    def _field(self, start: int, length: int) -> BitVector:
        return self.word.slice(start, length)

    @property
    def dr(self) -> int:
        return self._field(4, 3).unsigned_value

    sr = dr  # ST keeps its source register where the others keep DR

    @property
    def sr1(self) -> int:
        return self._field(7, 3).unsigned_value

    @property
    def immediate_mode(self) -> bool:
        return self.word.bit(10) == 1

    @property
    def imm5(self) -> BitVector:
        return self._field(11, 5)

    @property
    def sr2(self) -> int:
        return self._field(13, 3).unsigned_value

    @property
    def nzp(self) -> BitVector:
        return self._field(4, 3)

    @property
    def pcoffset9(self) -> int:
        return self._field(7, 9).sign_extend(WORD_BITS).signed_value

    @property
    def trapvect8(self) -> int:
        return self._field(8, 8).unsigned_value


def decode(word: BitVector, pc: int) -> Instruction:
    """Decode an instruction word fetched just before `pc`."""
    value = word.slice(0, 4).unsigned_value
    try:
        opcode = Opcode(value)
    except ValueError:
        raise IllegalOpcode(value, pc) from None
    return Instruction(opcode=opcode, word=word.copy(), pc=pc)


def _second_operand(instr: Instruction, cpu: CPU) -> BitVector:
    """Sign-extended imm5 in immediate mode, otherwise SR2."""
    if instr.immediate_mode:
        return instr.imm5.sign_extend(WORD_BITS)
    return cpu.get_reg(instr.sr2)


# Instruction executor type
InstructionExecutor = Callable[[Instruction, CPU, OutputSink], Optional[int]]


def execute_br(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """BR nzp: if any selected flag is set, PC := PC + sext(PCoffset9)"""
    if cpu.cc.matches(instr.nzp):
        return cpu.pc + instr.pcoffset9
    return None


def execute_add(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """ADD: DR := SR1 + operand2"""
    result = BitVector(WORD_BITS)
    result.set_signed_value(
        cpu.get_reg(instr.sr1).signed_value + _second_operand(instr, cpu).signed_value
    )
    cpu.set_reg(instr.dr, result)
    return None


def execute_ld(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """LD: DR := MEM[PC + sext(PCoffset9)]"""
    cpu.set_reg(instr.dr, cpu.memory.read(cpu.pc + instr.pcoffset9))
    return None


def execute_st(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """ST: MEM[PC + sext(PCoffset9)] := SR"""
    cpu.memory.write(cpu.pc + instr.pcoffset9, cpu.get_reg(instr.sr))
    return None


def execute_and(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """AND: DR := SR1 AND operand2 (bitwise)"""
    cpu.set_reg(instr.dr, cpu.get_reg(instr.sr1) & _second_operand(instr, cpu))
    return None


def execute_not(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """NOT: DR := NOT SR"""
    result = cpu.get_reg(instr.sr1)
    result.invert()
    cpu.set_reg(instr.dr, result)
    return None


def execute_trap(instr: Instruction, cpu: CPU, io: OutputSink) -> Optional[int]:
    """TRAP x21 (OUT): output chr(R0[7:0]); TRAP x25 (HALT): halt execution"""
    vector = instr.trapvect8
    if vector == TrapVector.OUT:
        io.write_char(chr(cpu.get_reg(0).slice(8, 8).unsigned_value))
    elif vector == TrapVector.HALT:
        cpu.halted = True
    else:
        raise IllegalTrapVector(vector, cpu.pc)
    return None


# Instruction dispatch table
INSTRUCTION_EXECUTORS: dict[Opcode, InstructionExecutor] = {
    Opcode.BR: execute_br,
    Opcode.ADD: execute_add,
    Opcode.LD: execute_ld,
    Opcode.ST: execute_st,
    Opcode.AND: execute_and,
    Opcode.NOT: execute_not,
    Opcode.TRAP: execute_trap,
}

_missing = set(Opcode) - set(INSTRUCTION_EXECUTORS)
if _missing:
    raise RuntimeError(f"No executor for opcodes: {sorted(_missing)}")


def execute_instruction(
    instr: Instruction,
    cpu: CPU,
    io: OutputSink,
) -> Optional[int]:
    """Execute a single instruction.

    Returns:
        New PC value if a branch is taken, None otherwise
    """
    return INSTRUCTION_EXECUTORS[instr.opcode](instr, cpu, io)


def disassemble(word: BitVector) -> str:
    """Render an instruction word as assembly text."""
    try:
        instr = decode(word, 0)
    except IllegalOpcode:
        return f".FILL x{word.unsigned_value:04X}"
    op = instr.opcode

    if op == Opcode.BR:
        flags = "".join(
            name for name, bit in zip("nzp", str(instr.nzp)) if bit == "1"
        )
        if not flags:
            return "NOP"
        return f"BR{flags} #{instr.pcoffset9}"
    if op in (Opcode.ADD, Opcode.AND):
        if instr.immediate_mode:
            operand = f"#{instr.imm5.signed_value}"
        else:
            operand = f"R{instr.sr2}"
        return f"{op.name} R{instr.dr}, R{instr.sr1}, {operand}"
    if op in (Opcode.LD, Opcode.ST):
        return f"{op.name} R{instr.dr}, #{instr.pcoffset9}"
    if op == Opcode.NOT:
        return f"NOT R{instr.dr}, R{instr.sr1}"

    vector = instr.trapvect8
    try:
        return TrapVector(vector).name
    except ValueError:
        return f"TRAP x{vector:02X}"
