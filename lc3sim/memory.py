"""Memory and register file for the LC-3 simulator."""

from .bitvector import BitVector
from .errors import MemoryAccessError

WORD_BITS = 16
MEMORY_SIZE = 50
REGISTER_COUNT = 8


class Memory:
    """Fixed-size word memory with bounds-checked access.

    Cells are stored as private BitVectors; reads and writes copy so that
    callers never share storage with the memory array.
    """

    def __init__(self, size: int = MEMORY_SIZE, word_bits: int = WORD_BITS):
        self.size = size
        self.word_bits = word_bits
        self._data: list[BitVector] = [BitVector(word_bits) for _ in range(size)]

    def _check_bounds(self, addr: int) -> None:
        """Check if address is within valid range."""
        if addr < 0 or addr >= self.size:
            raise MemoryAccessError(f"Memory address out of range: {addr}", addr=addr)

    def read(self, addr: int) -> BitVector:
        """Return a copy of the word at `addr`."""
        self._check_bounds(addr)
        return self._data[addr].copy()

    def write(self, addr: int, word: BitVector) -> None:
        """Store a copy of `word` at `addr`."""
        self._check_bounds(addr)
        if word.width != self.word_bits:
            raise ValueError(
                f"Memory words are {self.word_bits} bits, got {word.width}"
            )
        self._data[addr] = word.copy()

    def get_watched(self, addresses: list[int]) -> dict[str, int]:
        """Get signed values at watched addresses as string-keyed dict."""
        result = {}
        for addr in addresses:
            if 0 <= addr < self.size:
                result[str(addr)] = self._data[addr].signed_value
        return result

    def snapshot(self) -> list[BitVector]:
        """Return copies of every memory cell."""
        return [word.copy() for word in self._data]


class RegisterFile:
    """General-purpose registers R0-R7; Ri starts out holding i."""

    def __init__(self, count: int = REGISTER_COUNT, word_bits: int = WORD_BITS):
        self.count = count
        self.word_bits = word_bits
        self._regs: list[BitVector] = [BitVector(word_bits, i) for i in range(count)]

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self.count:
            raise IndexError(f"Register index out of range: {index}")

    def read(self, index: int) -> BitVector:
        """Return a copy of register `index`."""
        self._check_index(index)
        return self._regs[index].copy()

    def write(self, index: int, word: BitVector) -> None:
        """Store a copy of `word` in register `index`."""
        self._check_index(index)
        if word.width != self.word_bits:
            raise ValueError(
                f"Registers are {self.word_bits} bits, got {word.width}"
            )
        self._regs[index] = word.copy()

    def values(self) -> list[int]:
        """Signed value of every register."""
        return [reg.signed_value for reg in self._regs]

    def snapshot(self) -> list[BitVector]:
        """Return copies of every register."""
        return [reg.copy() for reg in self._regs]
