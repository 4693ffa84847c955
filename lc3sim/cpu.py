"""CPU state model for the LC-3 simulator."""

from typing import Optional

from .bitvector import BitVector
from .memory import Memory, RegisterFile, WORD_BITS

CC_NEGATIVE = "100"
CC_ZERO = "010"
CC_POSITIVE = "001"


class ConditionCode:
    """N/Z/P flags held as a 3-bit one-hot vector.

    Starts as 000 until the first condition-code defining instruction runs.
    `set_from_value` is the only way to change the flags, so once set exactly
    one bit is on.
    """

    def __init__(self):
        self._bits = BitVector(3)

    def set_from_value(self, value: int) -> None:
        """Set N, Z or P from the sign of a signed integer."""
        if value < 0:
            self._bits.set_bits(CC_NEGATIVE)
        elif value == 0:
            self._bits.set_bits(CC_ZERO)
        else:
            self._bits.set_bits(CC_POSITIVE)

    @property
    def negative(self) -> bool:
        return self._bits.bit(0) == 1

    @property
    def zero(self) -> bool:
        return self._bits.bit(1) == 1

    @property
    def positive(self) -> bool:
        return self._bits.bit(2) == 1

    def matches(self, nzp: BitVector) -> bool:
        """True if any flag selected by a 3-bit nzp mask is set."""
        return (self._bits.unsigned_value & nzp.unsigned_value) != 0

    @property
    def bits(self) -> BitVector:
        return self._bits.copy()

    def __str__(self) -> str:
        return str(self._bits)


class CPU:
    """CPU state: PC, IR, condition codes, registers and memory."""

    def __init__(
        self,
        memory: Optional[Memory] = None,
        registers: Optional[RegisterFile] = None,
    ):
        self.memory = memory if memory is not None else Memory()
        self.registers = registers if registers is not None else RegisterFile()
        self.cc = ConditionCode()
        self.pc: int = 0
        self.ir = BitVector(WORD_BITS)
        self.halted: bool = False

    def get_reg(self, index: int) -> BitVector:
        return self.registers.read(index)

    def set_reg(self, index: int, word: BitVector) -> None:
        """Write a register and update the condition codes from it."""
        self.registers.write(index, word)
        self.cc.set_from_value(word.signed_value)

    def get_state(self) -> dict:
        """Get current register state as dictionary."""
        return {
            "pc": self.pc,
            "ir": str(self.ir),
            "cc": str(self.cc),
            "registers": self.registers.values(),
            "halted": self.halted,
        }
