from boolvec import PackedBitVector


def assert_tail_clear(vector: PackedBitVector) -> None:
    """
    Asserts that no bit past the logical size is set in the backing words.
    """

    last_word = vector.to_words()[-1]
    assert last_word & ~vector.tail_mask == 0, (
        f"padding bits set in last word of size {vector.size}: {last_word:#034b}"
    )


def vector_with(size: int, *indices: int) -> PackedBitVector:
    """
    Creates a vector of ``size`` bits with ``indices`` set.
    """

    vector = PackedBitVector(size)
    for index in indices:
        vector.set_bit(index, True)

    return vector
