from __future__ import annotations

from typing import Any

__all__ = (
    "BitVectorError",
    "InvalidValueError",
    "OutOfRangeError",
    "IndexOutOfRangeError",
    "RangeExceededError",
    "SizeMismatchError",
)


class BitVectorError(Exception):
    """
    Base class exception for all bit vector errors.
    """

    __slots__ = ()


class InvalidValueError(BitVectorError, TypeError):
    """
    Thrown when a value that should be a safe integer (or another well-typed argument) isn't.
    """

    __slots__ = ()


class OutOfRangeError(BitVectorError, ValueError):
    """
    Thrown when a well-typed integer violates a bound.
    """

    __slots__ = ("value", "bound")

    def __init__(self, message: str, value: Any = None, bound: int | None = None):
        #: The offending value, if there was a single one.
        self.value = value
        #: The bound that was violated, if any.
        self.bound = bound

        super().__init__(message)


class IndexOutOfRangeError(OutOfRangeError, IndexError):
    """
    Thrown when an index is not strictly less than the size it addresses.
    """

    __slots__ = ()

    def __init__(self, value: int, max_size: int):
        super().__init__(
            f"Index {value} is out of bounds for a vector of size {max_size}, "
            f"valid indices are 0 to {max_size - 1}",
            value=value,
            bound=max_size,
        )


class RangeExceededError(OutOfRangeError):
    """
    Thrown when a ``(start, count)`` range runs past the end of a vector.
    """

    __slots__ = ("start", "count")

    def __init__(self, start: int, count: int, size: int):
        self.start = start
        self.count = count

        super().__init__(
            f"Range [{start}, {start + count}) exceeds the vector bounds [0, {size})",
            value=start + count,
            bound=size,
        )


class SizeMismatchError(OutOfRangeError):
    """
    Thrown when a binary operation is applied to two vectors of different logical sizes.
    """

    __slots__ = ("left_size", "right_size")

    def __init__(self, left_size: int, right_size: int):
        #: The size of the left operand.
        self.left_size = left_size
        #: The size of the right operand.
        self.right_size = right_size

        super().__init__(
            f"Vectors must have the same size (got {left_size} and {right_size})",
            value=right_size,
            bound=left_size,
        )
