import logging

from boolvec import PackedBitVector, from_raw_words, operations


def main():
    logging.basicConfig(level=logging.DEBUG)

    vector = PackedBitVector(64)
    print("Size:", vector.size)

    vector.set_range(0, 10, True)
    print("First 20 bits:", vector.get_range(0, 20))
    print("Population count (should be 10):", vector.population_count())

    vector.set_bit(32, True).set_bit(33, True).set_bit(0, False)
    print("Population count (should be 11):", vector.population_count())
    print("First set bit (should be 1):", vector.get_first_set_index())
    print("Last set bit (should be 33):", vector.get_last_set_index())
    print("Truthy indices:", list(vector.truthy_indices()))

    other = PackedBitVector(64).set_range(5, 30, True)
    print("AND:", list(operations.and_(vector, other).truthy_indices()))
    print("Difference:", list((vector - other).truthy_indices()))

    # bits past size 100 in the last word are dropped
    raw = from_raw_words(100, [0xFFFFFFFF, 0, 0, 0xFFFFFFFF])
    print("Raw population count (should be 36):", raw.population_count())


if __name__ == "__main__":
    main()
