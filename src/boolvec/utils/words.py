"""
Word-level primitives: the addressing law, masks, SWAR population count and bit scans over
32-bit unsigned words.

All functions here take and return plain :class:`int` values in ``[0, 2**32)``. Python integers
are unbounded, so anything that can produce bits above bit 31 (``~``, negation) is masked with
:data:`ALL_BITS` before it is handed back.
"""

from __future__ import annotations

from collections.abc import Callable

import attr

#: The number of logical bits stored in a single word.
BITS_PER_WORD = 32

#: Shifting an index right by this amount gives its word index.
CHUNK_SHIFT = 5

#: Masking an index with this gives its offset within a word.
CHUNK_MASK = 31

#: A word with every bit set.
ALL_BITS = 0xFFFFFFFF

#: The largest supported vector size, ``floor((2**32 - 1) / 8)``. Keeps every chunk index and
#: shift inside 32-bit arithmetic.
MAX_SAFE_SIZE = 536_870_911

#: The largest integer magnitude accepted as a "safe" integer at all.
MAX_SAFE_INTEGER = 2**53 - 1


@attr.s(frozen=True, slots=True)
class BitAddress:
    """
    The position of a single logical bit inside the word sequence.
    """

    #: The index of the word holding the bit.
    chunk: int = attr.ib()

    #: The bit offset within that word, from the least significant bit.
    offset: int = attr.ib()

    @property
    def mask(self) -> int:
        """
        A word with only this bit set.
        """

        return 1 << self.offset


def get_chunk(index: int) -> int:
    """
    Gets the word index for a logical bit index.
    """

    return index >> CHUNK_SHIFT


def get_chunk_offset(index: int) -> int:
    """
    Gets the offset of a logical bit index within its word.
    """

    return index & CHUNK_MASK


def get_chunk_count(bits: int) -> int:
    """
    Gets the number of words needed to hold ``bits`` logical bits.
    """

    return (bits + BITS_PER_WORD - 1) >> CHUNK_SHIFT


def address(index: int) -> BitAddress:
    """
    Splits a logical bit index into its word index and in-word offset.
    """

    return BitAddress(chunk=index >> CHUNK_SHIFT, offset=index & CHUNK_MASK)


def tail_mask_for(size: int) -> int:
    """
    Returns the mask of meaningful bits in the last word of a vector of ``size`` bits.
    """

    tail_bits = size & CHUNK_MASK
    if tail_bits == 0:
        return ALL_BITS

    return (1 << tail_bits) - 1


def low_mask(bits: int) -> int:
    """
    Returns a word with the lowest ``bits`` bits set. ``bits`` may be 0 through 32.
    """

    if bits >= BITS_PER_WORD:
        return ALL_BITS

    return (1 << bits) - 1


def high_mask(offset: int) -> int:
    """
    Returns a word with every bit at or above ``offset`` set.
    """

    return (ALL_BITS << offset) & ALL_BITS


def count_word(value: int) -> int:
    """
    Counts the set bits in a single word using the SWAR pairwise-sum trick.
    """

    value = value - ((value >> 1) & 0x55555555)
    value = (value & 0x33333333) + ((value >> 2) & 0x33333333)
    value = (value + (value >> 4)) & 0x0F0F0F0F
    return ((value * 0x01010101) & ALL_BITS) >> 24


def lowest_set_bit(word: int) -> int:
    """
    Returns the offset of the least significant set bit of a non-zero word.
    """

    # isolating the lowest bit leaves a power of two; its bit length is position + 1
    return (word & -word).bit_length() - 1


def highest_set_bit(word: int) -> int:
    """
    Returns the offset of the most significant set bit of a non-zero word.
    """

    return word.bit_length() - 1


## == PER-WORD OPERATORS == ##
# These mirror the vector-level set algebra one word at a time. Each result is masked back down
# to 32 bits; the caller is responsible for the tail.

WordOperator = Callable[[int, int], int]


def and_word(a: int, b: int) -> int:
    return a & b


def or_word(a: int, b: int) -> int:
    return a | b


def xor_word(a: int, b: int) -> int:
    return a ^ b


def nand_word(a: int, b: int) -> int:
    return ~(a & b) & ALL_BITS


def nor_word(a: int, b: int) -> int:
    return ~(a | b) & ALL_BITS


def xnor_word(a: int, b: int) -> int:
    return ~(a ^ b) & ALL_BITS


def difference_word(a: int, b: int) -> int:
    return a & ~b & ALL_BITS


def not_word(a: int) -> int:
    return ~a & ALL_BITS
