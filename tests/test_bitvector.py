"""Tests for the BitVector module."""

import pytest
from lc3sim.bitvector import BitVector


class TestBitVector:
    """BitVector module tests."""

    def test_default_initialization(self):
        """Vectors start at zero with the declared width."""
        bv = BitVector(16)
        assert bv.width == 16
        assert len(bv) == 16
        assert str(bv) == "0" * 16
        assert bv.unsigned_value == 0

    def test_from_literal(self):
        """Literal sets the bits MSB-first."""
        bv = BitVector.from_literal("0000000001000001")
        assert bv.unsigned_value == 65
        assert bv[9] == 1
        assert bv[15] == 1
        assert bv[0] == 0

    def test_from_literal_wrong_length(self):
        """Literal length must equal declared width."""
        with pytest.raises(ValueError):
            BitVector.from_literal("101", width=16)

    def test_from_literal_bad_characters(self):
        """Only 0 and 1 are accepted."""
        with pytest.raises(ValueError):
            BitVector.from_literal("0000 0000 0000 00")
        with pytest.raises(ValueError):
            BitVector.from_literal("000000000000000x")

    def test_unsigned_round_trip(self):
        """Every 16-bit unsigned value round-trips."""
        bv = BitVector(16)
        for n in range(1 << 16):
            bv.set_unsigned_value(n)
            assert bv.unsigned_value == n

    def test_signed_round_trip(self):
        """Every 16-bit signed value round-trips."""
        bv = BitVector(16)
        for n in range(-32768, 32768):
            bv.set_signed_value(n)
            assert bv.signed_value == n

    def test_unsigned_out_of_range(self):
        """Unsigned values must fit in the width."""
        bv = BitVector(3)
        with pytest.raises(ValueError):
            bv.set_unsigned_value(8)
        with pytest.raises(ValueError):
            bv.set_unsigned_value(-1)

    def test_signed_wraparound(self):
        """Signed encoding truncates modulo 2**width."""
        bv = BitVector(16)
        bv.set_signed_value(32768)
        assert bv.signed_value == -32768
        bv.set_signed_value(-32769)
        assert bv.signed_value == 32767
        bv.set_signed_value(65536)
        assert bv.signed_value == 0

    def test_signed_reading_of_negative_pattern(self):
        """MSB carries negative weight."""
        assert BitVector.from_literal("1111111111111010").signed_value == -6
        assert BitVector.from_literal("11101").signed_value == -3
        assert BitVector.from_literal("11101").unsigned_value == 29

    def test_slice(self):
        """Slice copies the requested field."""
        bv = BitVector.from_literal("0001000010111101")
        assert str(bv.slice(0, 4)) == "0001"
        assert str(bv.slice(4, 3)) == "000"
        assert str(bv.slice(7, 3)) == "010"
        assert str(bv.slice(11, 5)) == "11101"
        assert bv.slice(11, 5).width == 5

    def test_slice_out_of_range(self):
        """Slice may not run past the last bit."""
        bv = BitVector(16)
        with pytest.raises(ValueError):
            bv.slice(10, 7)
        with pytest.raises(ValueError):
            bv.slice(-1, 2)

    def test_slice_is_independent(self):
        """Changing a slice leaves the source alone."""
        bv = BitVector.from_literal("1111000011110000")
        part = bv.slice(0, 4)
        part.invert()
        assert str(part) == "0000"
        assert str(bv) == "1111000011110000"

    def test_slice_composition(self):
        """Opcode, register and offset fields rebuild the word."""
        for literal in ("0010000000000010", "1111000000100101", "0000111111111101"):
            bv = BitVector.from_literal(literal)
            rebuilt = bv.slice(0, 4) + bv.slice(4, 3) + bv.slice(7, 9)
            assert rebuilt == bv

    def test_invert(self):
        """Invert flips every bit in place."""
        bv = BitVector(16, 5)
        bv.invert()
        assert str(bv) == "1111111111111010"
        assert bv.signed_value == -6
        assert bv.width == 16

    def test_sign_extend(self):
        """Sign bit is replicated into the upper bits."""
        assert str(BitVector.from_literal("11101").sign_extend(16)) == "1111111111111101"
        assert str(BitVector.from_literal("01101").sign_extend(16)) == "0000000000001101"
        assert BitVector.from_literal("111111101").sign_extend(16).signed_value == -3

    def test_sign_extend_cannot_narrow(self):
        with pytest.raises(ValueError):
            BitVector(16).sign_extend(8)

    def test_bitwise_and(self):
        """AND works bit by bit."""
        a = BitVector.from_literal("0000000000000111")
        b = BitVector.from_literal("1111111111111101")
        assert (a & b).unsigned_value == 5

    def test_bitwise_and_width_mismatch(self):
        with pytest.raises(ValueError):
            BitVector(16) & BitVector(3)

    def test_copy(self):
        """Copy shares no state with the original."""
        bv = BitVector(16, 42)
        dup = bv.copy()
        dup.set_unsigned_value(7)
        assert bv.unsigned_value == 42
        assert dup == BitVector(16, 7)

    def test_equality(self):
        """Equality compares width and pattern."""
        assert BitVector(16, 3) == BitVector(16, 3)
        assert BitVector(16, 3) != BitVector(16, 4)
        assert BitVector(3, 3) != BitVector(16, 3)

    def test_format_grouped(self):
        bv = BitVector.from_literal("1111000000100101")
        assert bv.format() == "1111000000100101"
        assert bv.format(grouped=True) == "1111 0000 0010 0101"
