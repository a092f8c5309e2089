from __future__ import annotations

from collections.abc import Callable, Iterator, MutableSequence
from itertools import islice
from typing import Any, ClassVar, Self

from typing_extensions import override

from boolvec.exc import InvalidValueError, OutOfRangeError, RangeExceededError, SizeMismatchError
from boolvec.utils import LoggerWithTrace
from boolvec.utils.validation import as_safe_integer, validate
from boolvec.utils.words import (
    ALL_BITS,
    BITS_PER_WORD,
    CHUNK_MASK,
    CHUNK_SHIFT,
    MAX_SAFE_SIZE,
    WordOperator,
    address,
    and_word,
    count_word,
    difference_word,
    get_chunk_count,
    high_mask,
    highest_set_bit,
    low_mask,
    lowest_set_bit,
    nand_word,
    nor_word,
    not_word,
    or_word,
    tail_mask_for,
    xnor_word,
    xor_word,
)

__all__ = ("PackedBitVector",)

logger: LoggerWithTrace = LoggerWithTrace.get(__name__)


class PackedBitVector:
    """
    A fixed-size array of booleans packed 32 to a word.

    Bits at positions at or past :attr:`.size` in the last word are always zero; every mutating
    method that can reach the last word re-applies :attr:`.tail_mask` before returning.

    Set algebra comes in two shapes. The named methods (:meth:`.and_`, :meth:`.or_`, ...) and the
    augmented operators (``&=``, ``|=``, ``^=``, ``-=``) mutate this vector and return it. The
    plain operators (``&``, ``|``, ``^``, ``-``, ``~``) and the functions in
    :mod:`boolvec.operations` allocate a new vector.
    """

    __slots__ = ("_size", "_words", "_word_count", "_tail_bits", "_tail_mask")

    #: The number of logical bits in each word.
    BITS_PER_WORD: ClassVar[int] = BITS_PER_WORD

    #: A word with every bit set.
    ALL_BITS: ClassVar[int] = ALL_BITS

    #: The largest supported size.
    MAX_SAFE_SIZE: ClassVar[int] = MAX_SAFE_SIZE

    #: Above this fraction of set bits, :meth:`.truthy_indices` scans bit by bit instead of
    #: isolating set bits word by word.
    DENSE_ARRAY_THRESHOLD: ClassVar[float] = 0.75

    def __init__(self, size: int) -> None:
        """
        :param size: The number of bits in the vector, between 1 and :attr:`.MAX_SAFE_SIZE`.
        :raises InvalidValueError: If ``size`` is not a safe integer.
        :raises OutOfRangeError: If ``size`` is out of range.
        """

        size = validate(size, name="size")
        if size < 1:
            raise OutOfRangeError('"size" must be greater than or equal to 1', value=size, bound=1)

        self._size = size
        self._word_count = get_chunk_count(size)
        self._tail_bits = size & CHUNK_MASK
        self._tail_mask = tail_mask_for(size)
        self._words: list[int] = [0] * self._word_count

    @classmethod
    def _adopt(cls, size: int, words: list[int]) -> Self:
        """
        Creates a vector that takes ownership of an already-computed word list, masking its tail.
        """

        vector = cls(size)
        vector._words = words
        vector._mask_tail()
        return vector

    ## == PROPERTIES == ##
    @property
    def size(self) -> int:
        """
        The number of logical bits in this vector.
        """

        return self._size

    @property
    def word_count(self) -> int:
        """
        The number of 32-bit words backing this vector.
        """

        return self._word_count

    @property
    def tail_bits(self) -> int:
        """
        The number of meaningful bits in the last word, or 0 if the last word is full.
        """

        return self._tail_bits

    @property
    def tail_mask(self) -> int:
        """
        The mask of meaningful bits in the last word.
        """

        return self._tail_mask

    def to_words(self) -> list[int]:
        """
        Returns a copy of the backing words, least significant bit first.
        """

        return self._words.copy()

    def clone(self) -> Self:
        """
        Creates an independent copy of this vector.
        """

        copy = type(self)(self._size)
        copy._words = self._words.copy()
        return copy

    def __copy__(self) -> Self:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.clone()

    ## == INTERNALS == ##
    def _mask_tail(self) -> None:
        self._words[-1] &= self._tail_mask

    def _bit(self, index: int) -> bool:
        return (self._words[index >> CHUNK_SHIFT] & (1 << (index & CHUNK_MASK))) != 0

    def _write_masked(self, chunk: int, mask: int, value: bool) -> None:
        if value:
            self._words[chunk] |= mask
        else:
            self._words[chunk] &= ~mask

    def _check_range(self, start: Any, count: Any) -> tuple[int, int]:
        start = validate(start, self._size, name="start")
        count = validate(count, self._size + 1, name="count")
        if start + count > self._size:
            raise RangeExceededError(start, count, self._size)

        return start, count

    def _search_word(self, chunk: int, value: bool) -> int:
        """
        Returns the word at ``chunk`` with every bit equal to ``value`` set, tail masked.
        """

        word = self._words[chunk]
        if not value:
            word = not_word(word)

        if chunk == self._word_count - 1:
            word &= self._tail_mask

        return word

    ## == SINGLE BITS == ##
    def get_bit(self, index: int) -> bool:
        """
        Gets the state of a single bit.

        :raises InvalidValueError: If ``index`` is not a safe integer.
        :raises OutOfRangeError: If ``index`` is out of range.
        """

        index = validate(index, self._size, name="index")
        return self._bit(index)

    def set_bit(self, index: int, value: bool) -> Self:
        """
        Sets the state of a single bit.

        :return: This vector, for chaining.
        """

        index = validate(index, self._size, name="index")
        mask = 1 << (index & CHUNK_MASK)
        if value:
            self._words[index >> CHUNK_SHIFT] |= mask
        else:
            self._words[index >> CHUNK_SHIFT] &= ~mask

        return self

    def toggle(self, index: int) -> bool:
        """
        Flips a single bit.

        :return: The state of the bit after flipping it.
        """

        index = validate(index, self._size, name="index")
        chunk = index >> CHUNK_SHIFT
        mask = 1 << (index & CHUNK_MASK)
        self._words[chunk] ^= mask
        return (self._words[chunk] & mask) != 0

    def __getitem__(self, index: int) -> bool:
        return self.get_bit(index)

    def __setitem__(self, index: int, value: bool) -> None:
        self.set_bit(index, value)

    def __len__(self) -> int:
        return self._size

    ## == RANGES == ##
    def get_range(
        self, start: int, count: int, out: MutableSequence[bool] | None = None
    ) -> MutableSequence[bool]:
        """
        Reads ``count`` consecutive bits starting at ``start``.

        :param start: The first index to read.
        :param count: The number of bits to read. May be zero.
        :param out: An optional sequence to write the results into, which must have room for at
                    least ``count`` values. A new list is created if this is not provided.
        :return: The booleans read, in index order.
        :raises RangeExceededError: If ``start + count`` is past the end of the vector.
        :raises OutOfRangeError: If ``out`` is too small.
        """

        start, count = self._check_range(start, count)

        if out is None:
            out = [False] * count
        elif len(out) < count:
            raise OutOfRangeError(
                f"Output buffer too small: {len(out)} slots for {count} values",
                value=len(out),
                bound=count,
            )

        if count == 0:
            return out

        end = start + count
        first = address(start)
        last = address(end - 1)

        position = 0
        offset = first.offset
        for chunk in range(first.chunk, last.chunk + 1):
            stop = last.offset + 1 if chunk == last.chunk else BITS_PER_WORD
            word = self._words[chunk] >> offset

            for _ in range(offset, stop):
                out[position] = (word & 1) == 1
                word >>= 1
                position += 1

            offset = 0

        return out

    def set_range(self, start: int, count: int, value: bool) -> Self:
        """
        Sets ``count`` consecutive bits starting at ``start`` to ``value``.

        :return: This vector, for chaining.
        :raises RangeExceededError: If ``start + count`` is past the end of the vector.
        """

        start, count = self._check_range(start, count)
        if count == 0:
            return self

        first = address(start)
        last = address(start + count - 1)

        if first.chunk == last.chunk:
            self._write_masked(first.chunk, low_mask(count) << first.offset, value)
        else:
            self._write_masked(first.chunk, high_mask(first.offset), value)

            interior = last.chunk - first.chunk - 1
            if interior > 0:
                fill = ALL_BITS if value else 0
                self._words[first.chunk + 1 : last.chunk] = [fill] * interior

            self._write_masked(last.chunk, low_mask(last.offset + 1), value)

        if last.chunk == self._word_count - 1:
            self._mask_tail()

        return self

    def fill(self, value: bool) -> Self:
        """
        Sets every bit to ``value``.

        :return: This vector, for chaining.
        """

        self._words = [ALL_BITS if value else 0] * self._word_count
        if value:
            self._mask_tail()

        return self

    def clear(self) -> Self:
        """
        Sets every bit to False.
        """

        return self.fill(False)

    def set_all(self) -> Self:
        """
        Sets every bit to True.
        """

        return self.fill(True)

    ## == SET ALGEBRA == ##
    def _check_operand(self, other: Any) -> PackedBitVector:
        if not isinstance(other, PackedBitVector):
            raise InvalidValueError(
                f"Expected a {PackedBitVector.__name__}, got {type(other).__name__}"
            )

        if other._size != self._size:
            raise SizeMismatchError(self._size, other._size)

        return other

    def _combine(self, other: Any, operator: WordOperator) -> list[int]:
        other = self._check_operand(other)
        if logger.is_tracing:
            logger.trace(f"{operator.__name__} over {self._word_count} words ({self._size} bits)")

        return [operator(a, b) for a, b in zip(self._words, other._words)]

    def _combined(self, other: Any, operator: WordOperator) -> Self:
        return self._adopt(self._size, self._combine(other, operator))

    def _combine_in_place(self, other: Any, operator: WordOperator) -> Self:
        self._words = self._combine(other, operator)
        self._mask_tail()
        return self

    def _inverted(self) -> Self:
        return self._adopt(self._size, [not_word(word) for word in self._words])

    def and_(self, other: PackedBitVector) -> Self:
        """
        Keeps only the bits set in both this vector and ``other``, in place.

        :return: This vector, for chaining.
        :raises SizeMismatchError: If the vectors have different sizes.
        """

        return self._combine_in_place(other, and_word)

    def or_(self, other: PackedBitVector) -> Self:
        """
        Sets every bit set in ``other``, in place.
        """

        return self._combine_in_place(other, or_word)

    def xor(self, other: PackedBitVector) -> Self:
        """
        Flips every bit set in ``other``, in place.
        """

        return self._combine_in_place(other, xor_word)

    def nand(self, other: PackedBitVector) -> Self:
        return self._combine_in_place(other, nand_word)

    def nor(self, other: PackedBitVector) -> Self:
        return self._combine_in_place(other, nor_word)

    def xnor(self, other: PackedBitVector) -> Self:
        return self._combine_in_place(other, xnor_word)

    def difference(self, other: PackedBitVector) -> Self:
        """
        Clears every bit set in ``other``, in place.
        """

        return self._combine_in_place(other, difference_word)

    def invert(self) -> Self:
        """
        Flips every bit, in place.
        """

        self._words = [not_word(word) for word in self._words]
        self._mask_tail()
        return self

    def __and__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self._combined(other, and_word)

    def __or__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self._combined(other, or_word)

    def __xor__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self._combined(other, xor_word)

    def __sub__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self._combined(other, difference_word)

    def __invert__(self) -> Self:
        return self._inverted()

    def __iand__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self.and_(other)

    def __ior__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self.or_(other)

    def __ixor__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self.xor(other)

    def __isub__(self, other: object) -> Self:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self.difference(other)

    ## == COMPARISON == ##
    def equals(self, other: PackedBitVector) -> bool:
        """
        Checks if this vector has the same size and bits as ``other``.
        """

        if other is self:
            return True

        if not isinstance(other, PackedBitVector) or other._size != self._size:
            return False

        last = self._word_count - 1
        if self._words[:last] != other._words[:last]:
            return False

        # the tail should already be clear on both sides, but compare masked anyway
        mask = self._tail_mask
        return (self._words[last] & mask) == (other._words[last] & mask)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackedBitVector):
            return NotImplemented

        return self.equals(other)

    # mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    ## == COUNTING & SEARCH == ##
    def population_count(self) -> int:
        """
        Counts the bits that are set.
        """

        last = self._word_count - 1
        count = sum(count_word(word) for word in islice(self._words, last))
        return count + count_word(self._words[last] & self._tail_mask)

    truthy_count = population_count

    def is_empty(self) -> bool:
        """
        Returns True if no bit is set.
        """

        return not any(self._words)

    def _find_forward(self, value: bool, start: int) -> int:
        chunk = start >> CHUNK_SHIFT
        word = self._search_word(chunk, value) & high_mask(start & CHUNK_MASK)

        while True:
            if word:
                return (chunk << CHUNK_SHIFT) + lowest_set_bit(word)

            chunk += 1
            if chunk >= self._word_count:
                return -1

            word = self._search_word(chunk, value)

    def _find_backward(self, value: bool, bound: int) -> int:
        # an empty window still inspects index 0
        if bound <= 0:
            return 0 if self._bit(0) == value else -1

        chunk = (bound - 1) >> CHUNK_SHIFT
        word = self._search_word(chunk, value) & low_mask(((bound - 1) & CHUNK_MASK) + 1)

        while True:
            if word:
                return (chunk << CHUNK_SHIFT) + highest_set_bit(word)

            chunk -= 1
            if chunk < 0:
                return -1

            word = self._search_word(chunk, value)

    def index_of(self, value: bool, from_index: int = 0) -> int:
        """
        Finds the first bit equal to ``value`` at or after ``from_index``.

        :param value: The bit state to search for.
        :param from_index: Where to start searching. Negative values count back from the end of
                           the vector and are clamped to 0.
        :return: The index found, or -1 if there is none.
        :raises InvalidValueError: If ``from_index`` is not a safe integer.
        """

        from_index = as_safe_integer(from_index, "from_index")
        if from_index < 0:
            from_index = max(self._size + from_index, 0)

        if from_index >= self._size:
            return -1

        return self._find_forward(bool(value), from_index)

    def last_index_of(self, value: bool, from_index: int | None = None) -> int:
        """
        Finds the last bit equal to ``value`` strictly before ``from_index``.

        :param value: The bit state to search for.
        :param from_index: The exclusive upper bound of the search, defaulting to the size of the
                           vector. Negative values count back from the end. A bound of zero or
                           less checks index 0 only.
        :return: The index found, or -1 if there is none.
        :raises InvalidValueError: If ``from_index`` is not a safe integer.
        """

        if from_index is None:
            bound = self._size
        else:
            bound = as_safe_integer(from_index, "from_index")
            if bound < 0:
                bound += self._size

            bound = min(bound, self._size)

        return self._find_backward(bool(value), bound)

    def get_first_set_index(self, start: int = 0) -> int:
        """
        Finds the first set bit at or after ``start``, or -1.

        :raises OutOfRangeError: If ``start`` is not a valid index.
        """

        start = validate(start, self._size, name="start")
        return self._find_forward(True, start)

    def get_last_set_index(self, end: int | None = None) -> int:
        """
        Finds the last set bit strictly before ``end``, or -1. An ``end`` of 0 checks index 0,
        the same as :meth:`.last_index_of`.

        :raises OutOfRangeError: If ``end`` is greater than the size of the vector.
        """

        end = self._size if end is None else validate(end, self._size + 1, name="end")
        return self._find_backward(True, end)

    ## == ITERATION == ##
    def truthy_indices(self, start: int = 0, end: int | None = None) -> Iterator[int]:
        """
        Lazily yields the indices of every set bit in ``[start, end)``, in ascending order.

        Bounds are validated immediately, not on the first ``next()``.

        :param start: The first index to consider.
        :param end: The exclusive end of the window, defaulting to the size of the vector.
        """

        start = validate(start, self._size, name="start")
        end = self._size if end is None else validate(end, self._size + 1, name="end")
        return self._iter_truthy(start, end)

    def _iter_truthy(self, start: int, end: int) -> Iterator[int]:
        if start >= end:
            return

        if self.population_count() > self._size * self.DENSE_ARRAY_THRESHOLD:
            for index in range(start, end):
                if self._bit(index):
                    yield index

            return

        chunk = start >> CHUNK_SHIFT
        last_chunk = (end - 1) >> CHUNK_SHIFT
        word = self._words[chunk] & high_mask(start & CHUNK_MASK)

        while True:
            base = chunk << CHUNK_SHIFT
            while word:
                index = base + lowest_set_bit(word)
                if index >= end:
                    return

                yield index
                word &= word - 1

            chunk += 1
            if chunk > last_chunk:
                return

            word = self._words[chunk]

    def for_each(
        self,
        callback: Callable[[bool, int, PackedBitVector], Any],
        start: int = 0,
        count: int | None = None,
    ) -> None:
        """
        Calls ``callback(value, index, vector)`` for each bit in ``[start, start + count)``.

        :param callback: The function to call.
        :param start: The first index to visit.
        :param count: The number of bits to visit, defaulting to the rest of the vector.
        :raises InvalidValueError: If ``callback`` is not callable.
        """

        if not callable(callback):
            raise InvalidValueError(f'"callback" must be callable, not {type(callback).__name__}')

        if count is None:
            count = self._size - validate(start, self._size, name="start")

        start, count = self._check_range(start, count)
        for index in range(start, start + count):
            callback(self._bit(index), index, self)

    def keys(self) -> range:
        """
        Returns every index of this vector.
        """

        return range(self._size)

    def values(self) -> Iterator[bool]:
        """
        Yields the state of every bit, in index order.
        """

        for index in range(self._size):
            yield self._bit(index)

    def entries(self) -> Iterator[tuple[int, bool]]:
        """
        Yields ``(index, value)`` for every bit, in index order.
        """

        for index in range(self._size):
            yield index, self._bit(index)

    def __iter__(self) -> Iterator[bool]:
        return self.values()

    ## == DISPLAY == ##
    @override
    def __str__(self) -> str:
        return "".join("1" if value else "0" for value in self.values())

    @override
    def __repr__(self) -> str:
        return f"<{type(self).__name__} size={self._size} set={self.population_count()}>"
