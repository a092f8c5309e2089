"""
Adapters that build a :class:`.PackedBitVector` out of other shapes of data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from boolvec.exc import InvalidValueError, OutOfRangeError
from boolvec.utils import LoggerWithTrace
from boolvec.utils.validation import as_safe_integer
from boolvec.utils.words import ALL_BITS
from boolvec.vector import PackedBitVector

__all__ = (
    "from_indices",
    "from_bools",
    "from_array",
    "from_flag_objects",
    "from_raw_words",
)

logger: LoggerWithTrace = LoggerWithTrace.get(__name__)


def _require_iterable(value: Any, name: str) -> None:
    # strings and bytes iterate, but never as indices or words
    if isinstance(value, str | bytes | bytearray) or not isinstance(value, Iterable):
        raise InvalidValueError(f'"{name}" must be an iterable, not {type(value).__name__}')


def from_indices(size: int, indices: Iterable[int]) -> PackedBitVector:
    """
    Creates a new vector with every bit in ``indices`` set.

    :param size: The size of the new vector.
    :param indices: The indices to set. Each one is validated like :meth:`.set_bit` would.
    """

    _require_iterable(indices, "indices")

    vector = PackedBitVector(size)
    for index in indices:
        vector.set_bit(index, True)

    if logger.is_tracing:
        logger.trace(f"Built {vector!r} from indices")
    return vector


def from_bools(size: int, flags: Sequence[bool]) -> PackedBitVector:
    """
    Creates a new vector where bit ``i`` is ``flags[i]``. ``flags`` may be shorter than
    ``size``; the remaining bits are False.
    """

    _require_iterable(flags, "flags")

    vector = PackedBitVector(size)
    flags = list(flags)
    if len(flags) > vector.size:
        raise OutOfRangeError(
            f"Got {len(flags)} flags for a vector of size {vector.size}",
            value=len(flags),
            bound=vector.size,
        )

    for index, flag in enumerate(flags):
        if not isinstance(flag, bool):
            raise InvalidValueError(f"Flag {index} must be a bool, not {type(flag).__name__}")

        if flag:
            vector.set_bit(index, True)

    if logger.is_tracing:
        logger.trace(f"Built {vector!r} from bools")
    return vector


def from_array(size: int, items: Sequence[int] | Sequence[bool]) -> PackedBitVector:
    """
    Creates a new vector from either a list of booleans (see :func:`.from_bools`) or a list of
    indices (see :func:`.from_indices`). The list must not be empty, so that its kind can be told
    apart.
    """

    if isinstance(items, str | bytes | bytearray) or not isinstance(items, Sequence):
        raise InvalidValueError(f'"items" must be a sequence, not {type(items).__name__}')

    if len(items) == 0:
        raise InvalidValueError('"items" must not be empty')

    if all(isinstance(item, bool) for item in items):
        return from_bools(size, items)  # type: ignore[arg-type]

    return from_indices(size, items)  # type: ignore[arg-type]


def _read_field(item: Any, key: str, position: int) -> Any:
    if item is None:
        raise InvalidValueError(f"Object {position} is None")

    if isinstance(item, Mapping):
        if key not in item:
            raise InvalidValueError(f'Object {position} has no "{key}" field')

        return item[key]

    try:
        return getattr(item, key)
    except AttributeError:
        raise InvalidValueError(f'Object {position} has no "{key}" field') from None


def from_flag_objects(size: int, key: str, objects: Iterable[Any]) -> PackedBitVector:
    """
    Creates a new vector with one bit set per object, at the index stored in its ``key`` field.

    Objects may be mappings (``obj[key]``) or plain objects (``obj.key``).

    :param size: The size of the new vector.
    :param key: The name of the field holding the index.
    :param objects: The objects to read indices from. May be empty.
    :raises InvalidValueError: If an object is missing the field or the field is not an integer.
    """

    _require_iterable(objects, "objects")

    vector = PackedBitVector(size)
    for position, item in enumerate(objects):
        index = as_safe_integer(_read_field(item, key, position), key)
        vector.set_bit(index, True)

    if logger.is_tracing:
        logger.trace(f"Built {vector!r} from objects keyed on '{key}'")
    return vector


def from_raw_words(size: int, words: Iterable[int]) -> PackedBitVector:
    """
    Creates a new vector from an existing sequence of 32-bit words, least significant bit first.

    ``words`` may be shorter than the vector needs, in which case the remaining words are zero.
    Any bits past ``size`` in the last word are discarded.

    :raises OutOfRangeError: If there are more words than a vector of ``size`` bits holds.
    :raises InvalidValueError: If ``words`` is not iterable, or a word is not an integer in
                               ``[0, 2**32)``.
    """

    _require_iterable(words, "words")

    vector = PackedBitVector(size)
    capacity = vector.word_count
    copied = list(words)

    if len(copied) > capacity:
        raise OutOfRangeError(
            f"Input has {len(copied)} words, but a vector of size {size} holds at most {capacity}",
            value=len(copied),
            bound=capacity,
        )

    for position, word in enumerate(copied):
        word = as_safe_integer(word, f"words[{position}]")
        if not 0 <= word <= ALL_BITS:
            raise InvalidValueError(f"Word {position} ({word}) is not a 32-bit unsigned integer")

        copied[position] = word

    copied.extend([0] * (capacity - len(copied)))

    if copied[-1] & ~vector.tail_mask:
        logger.debug(f"Discarding bits past size {size} in the last of {capacity} words")

    vector = PackedBitVector._adopt(size, copied)
    if logger.is_tracing:
        logger.trace(f"Built {vector!r} from {capacity} raw words")
    return vector
