"""
Allocating set algebra over :class:`.PackedBitVector`.

Every function here leaves its arguments untouched and returns a new vector of the same size.
The mutating equivalents are methods on the vector itself.
"""

from __future__ import annotations

from typing import Any

from boolvec.exc import InvalidValueError
from boolvec.utils.words import (
    WordOperator,
    and_word,
    difference_word,
    nand_word,
    nor_word,
    or_word,
    xnor_word,
    xor_word,
)
from boolvec.vector import PackedBitVector

__all__ = (
    "and_",
    "or_",
    "xor",
    "nand",
    "nor",
    "xnor",
    "difference",
    "not_",
    "equals",
)


def _require_vector(value: Any, name: str) -> PackedBitVector:
    if not isinstance(value, PackedBitVector):
        raise InvalidValueError(
            f'"{name}" must be a {PackedBitVector.__name__}, not {type(value).__name__}'
        )

    return value


def _operate(a: PackedBitVector, b: PackedBitVector, operator: WordOperator) -> PackedBitVector:
    return _require_vector(a, "a")._combined(b, operator)


def and_(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the bits set in both ``a`` and ``b``.

    :raises SizeMismatchError: If the vectors have different sizes.
    """

    return _operate(a, b, and_word)


def or_(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the bits set in either ``a`` or ``b``.
    """

    return _operate(a, b, or_word)


def xor(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the bits set in exactly one of ``a`` and ``b``.
    """

    return _operate(a, b, xor_word)


def nand(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the complement of :func:`.and_`.
    """

    return _operate(a, b, nand_word)


def nor(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the complement of :func:`.or_`.
    """

    return _operate(a, b, nor_word)


def xnor(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the complement of :func:`.xor`.
    """

    return _operate(a, b, xnor_word)


def difference(a: PackedBitVector, b: PackedBitVector) -> PackedBitVector:
    """
    Returns the bits set in ``a`` but not in ``b``.
    """

    return _operate(a, b, difference_word)


def not_(a: PackedBitVector) -> PackedBitVector:
    """
    Returns the complement of ``a``, within its logical size.
    """

    return _require_vector(a, "a")._inverted()


def equals(a: PackedBitVector, b: PackedBitVector) -> bool:
    """
    Checks if two vectors have the same size and the same bits. Never raises on a size mismatch.
    """

    return _require_vector(a, "a").equals(b)
