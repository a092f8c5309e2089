from __future__ import annotations

import operator
from typing import Any

from boolvec.exc import IndexOutOfRangeError, InvalidValueError, OutOfRangeError
from boolvec.utils.words import MAX_SAFE_INTEGER, MAX_SAFE_SIZE

__all__ = ("as_safe_integer", "validate", "is_safe_value")


def as_safe_integer(value: Any, name: str = "value") -> int:
    """
    Converts ``value`` into a plain :class:`int` if it is an exact integer of safe magnitude.

    Booleans, floats (even integral ones), strings and ``None`` are all rejected; anything that
    implements ``__index__`` is accepted.

    :raises InvalidValueError: If ``value`` is not a safe integer.
    """

    if isinstance(value, bool):
        raise InvalidValueError(f'"{name}" must be a safe integer, not a bool')

    try:
        result = operator.index(value)
    except TypeError:
        raise InvalidValueError(
            f'"{name}" must be a safe integer, not {type(value).__name__}'
        ) from None

    if not -MAX_SAFE_INTEGER <= result <= MAX_SAFE_INTEGER:
        raise InvalidValueError(f'"{name}" must be a safe integer, {result} is too large')

    return result


def validate(value: Any, max_size: int | None = None, name: str = "value") -> int:
    """
    Validates an index or count, returning it as a plain :class:`int`.

    :param value: The value to check.
    :param max_size: An optional *exclusive* upper bound. Indices pass the vector size, counts
                     and end bounds pass the vector size plus one.
    :param name: The argument name used in error messages.
    :raises InvalidValueError: If ``value`` is not a safe integer. Checked first.
    :raises OutOfRangeError: If ``value`` is negative or exceeds :data:`.MAX_SAFE_SIZE`.
    :raises IndexOutOfRangeError: If ``value`` is not less than ``max_size``.
    """

    result = as_safe_integer(value, name)

    if result < 0:
        raise OutOfRangeError(
            f'"{name}" must be greater than or equal to 0, got {result}', value=result, bound=0
        )

    if result > MAX_SAFE_SIZE:
        raise OutOfRangeError(
            f'"{name}" must be smaller than or equal to {MAX_SAFE_SIZE}, got {result}',
            value=result,
            bound=MAX_SAFE_SIZE,
        )

    if max_size is not None and result >= max_size:
        raise IndexOutOfRangeError(result, max_size)

    return result


def is_safe_value(value: Any, max_size: int | None = None) -> bool:
    """
    Non-raising form of :func:`.validate`.
    """

    try:
        validate(value, max_size)
    except (InvalidValueError, OutOfRangeError):
        return False

    return True
