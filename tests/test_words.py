from boolvec.utils.words import (
    ALL_BITS,
    BitAddress,
    address,
    count_word,
    get_chunk,
    get_chunk_count,
    get_chunk_offset,
    high_mask,
    highest_set_bit,
    low_mask,
    lowest_set_bit,
    nand_word,
    not_word,
    tail_mask_for,
    xnor_word,
)


def test_addressing():
    """
    Tests the index to (word, offset) split.
    """

    assert get_chunk(0) == 0
    assert get_chunk(31) == 0
    assert get_chunk(32) == 1
    assert get_chunk(63) == 1

    assert get_chunk_offset(0) == 0
    assert get_chunk_offset(31) == 31
    assert get_chunk_offset(32) == 0

    assert get_chunk_count(1) == 1
    assert get_chunk_count(32) == 1
    assert get_chunk_count(33) == 2
    assert get_chunk_count(100) == 4

    assert address(33) == BitAddress(chunk=1, offset=1)
    assert address(33).mask == 0b10


def test_count_word():
    """
    Tests the SWAR population count on single words.
    """

    assert count_word(0) == 0
    assert count_word(ALL_BITS) == 32
    assert count_word(0b1010101) == 4
    assert count_word(0x55555555) == 16
    assert count_word(0xAAAAAAAA) == 16
    assert count_word(0x0F0F0F0F) == 16
    assert count_word(0xFFFFFFFE) == 31
    assert count_word(0x0000FFFF) == 16
    assert count_word(0x00FF00FF) == 16
    assert count_word(0x80000000) == 1


def test_masks():
    """
    Tests the tail, low and high masks.
    """

    assert tail_mask_for(32) == ALL_BITS
    assert tail_mask_for(64) == ALL_BITS
    assert tail_mask_for(33) == 0b1
    assert tail_mask_for(100) == 0b1111

    assert low_mask(0) == 0
    assert low_mask(3) == 0b111
    assert low_mask(32) == ALL_BITS

    assert high_mask(0) == ALL_BITS
    assert high_mask(31) == 0x80000000
    assert high_mask(4) == 0xFFFFFFF0


def test_bit_scans():
    """
    Tests finding the lowest and highest set bits of a word.
    """

    assert lowest_set_bit(1) == 0
    assert lowest_set_bit(0b1000) == 3
    assert lowest_set_bit(0x80000000) == 31
    assert lowest_set_bit(0b10110000) == 4

    assert highest_set_bit(1) == 0
    assert highest_set_bit(0b10110000) == 7
    assert highest_set_bit(ALL_BITS) == 31


def test_complementing_operators_stay_in_32_bits():
    """
    Tests that operators built on ``~`` never produce negative or oversized words.
    """

    assert not_word(0) == ALL_BITS
    assert not_word(ALL_BITS) == 0
    assert nand_word(0, 0) == ALL_BITS
    assert xnor_word(0b1, 0b1) == ALL_BITS
