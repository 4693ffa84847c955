"""Fixed-width bit vector for the LC-3 simulator."""

from typing import Optional


class BitVector:
    """Fixed-width bit pattern, indexed MSB-first.

    The pattern is kept as an unsigned integer tagged with its width. The
    width never changes after construction; every value written into the
    vector is checked or truncated to fit.
    """

    def __init__(self, width: int = 16, value: int = 0):
        if width < 1:
            raise ValueError(f"Bit vector width must be positive: {width}")
        self._width = width
        self._mask = (1 << width) - 1
        self._value = 0
        self.set_unsigned_value(value)

    @classmethod
    def from_literal(cls, bits: str, width: Optional[int] = None) -> "BitVector":
        """Build a vector from a string of '0'/'1' characters."""
        if width is None:
            width = len(bits)
        vector = cls(width)
        vector.set_bits(bits)
        return vector

    @property
    def width(self) -> int:
        return self._width

    def set_bits(self, bits: str) -> None:
        """Replace the pattern with an explicit bit literal of the same width."""
        if len(bits) != self._width:
            raise ValueError(
                f"Expected {self._width} bits, got {len(bits)}: {bits!r}"
            )
        if any(ch not in "01" for ch in bits):
            raise ValueError(f"Bit literal may only contain 0 and 1: {bits!r}")
        self._value = int(bits, 2)

    @property
    def unsigned_value(self) -> int:
        return self._value

    def set_unsigned_value(self, value: int) -> None:
        """Store a non-negative integer; it must fit in the width."""
        if value < 0 or value > self._mask:
            raise ValueError(
                f"Unsigned value {value} does not fit in {self._width} bits"
            )
        self._value = value

    @property
    def signed_value(self) -> int:
        """Two's-complement reading of the stored bits."""
        if self._value >> (self._width - 1):
            return self._value - (1 << self._width)
        return self._value

    def set_signed_value(self, value: int) -> None:
        """Store an integer in two's complement, wrapping modulo 2**width."""
        self._value = value & self._mask

    def bit(self, index: int) -> int:
        """Return bit `index`, counting from the most significant bit."""
        if index < 0 or index >= self._width:
            raise IndexError(f"Bit index {index} out of range for width {self._width}")
        return (self._value >> (self._width - 1 - index)) & 1

    def slice(self, start: int, length: int) -> "BitVector":
        """Copy bits [start, start + length) into a new vector."""
        if start < 0 or length < 1 or start + length > self._width:
            raise ValueError(
                f"Slice [{start}, {start + length}) exceeds width {self._width}"
            )
        shift = self._width - start - length
        return BitVector(length, (self._value >> shift) & ((1 << length) - 1))

    def invert(self) -> None:
        """Flip every bit in place."""
        self._value = ~self._value & self._mask

    def sign_extend(self, width: int = 16) -> "BitVector":
        """Return a copy widened to `width`, replicating the sign bit."""
        if width < self._width:
            raise ValueError(
                f"Cannot sign-extend {self._width} bits down to {width}"
            )
        extended = BitVector(width)
        extended.set_signed_value(self.signed_value)
        return extended

    def bitwise_and(self, other: "BitVector") -> "BitVector":
        """Bit-by-bit AND of two vectors of equal width."""
        self._check_same_width(other)
        return BitVector(self._width, self._value & other._value)

    def concat(self, other: "BitVector") -> "BitVector":
        """Append `other` after this vector's least significant bit."""
        return BitVector(
            self._width + other._width,
            (self._value << other._width) | other._value,
        )

    def copy(self) -> "BitVector":
        return BitVector(self._width, self._value)

    def format(self, grouped: bool = False) -> str:
        """Render as a bit string, optionally in groups of four from the MSB."""
        bits = str(self)
        if not grouped:
            return bits
        return " ".join(bits[i:i + 4] for i in range(0, len(bits), 4))

    def _check_same_width(self, other: "BitVector") -> None:
        if other._width != self._width:
            raise ValueError(
                f"Width mismatch: {self._width} and {other._width}"
            )

    def __and__(self, other: "BitVector") -> "BitVector":
        return self.bitwise_and(other)

    def __add__(self, other: "BitVector") -> "BitVector":
        return self.concat(other)

    def __getitem__(self, index: int) -> int:
        return self.bit(index)

    def __len__(self) -> int:
        return self._width

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._width == other._width and self._value == other._value

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return format(self._value, f"0{self._width}b")

    def __repr__(self) -> str:
        return f"BitVector({self._width}, '{self}')"
