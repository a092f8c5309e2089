import pytest

from boolvec import InvalidValueError, PackedBitVector, SizeMismatchError, operations
from tests import assert_tail_clear, vector_with

SIZES = [32, 33, 64, 65, 100]


@pytest.mark.parametrize("size", SIZES)
def test_pure_operations(size: int):
    """
    Tests every allocating operation on the {0, 1} / {1, 2} pattern.
    """

    a = vector_with(size, 0, 1)
    b = vector_with(size, 1, 2)

    result = operations.and_(a, b)
    assert list(result.truthy_indices()) == [1]
    assert_tail_clear(result)

    result = operations.or_(a, b)
    assert list(result.truthy_indices()) == [0, 1, 2]
    assert_tail_clear(result)

    result = operations.xor(a, b)
    assert list(result.truthy_indices()) == [0, 2]
    assert_tail_clear(result)

    result = operations.difference(a, b)
    assert list(result.truthy_indices()) == [0]
    assert_tail_clear(result)

    result = operations.nand(a, b)
    assert result.population_count() == size - 1
    assert not result.get_bit(1)
    assert result == operations.not_(operations.and_(a, b))
    assert_tail_clear(result)

    result = operations.nor(a, b)
    assert result.population_count() == size - 3
    assert result.index_of(True) == 3
    assert_tail_clear(result)

    result = operations.xnor(a, b)
    assert result.population_count() == size - 2
    assert result.get_bit(1)
    assert_tail_clear(result)

    result = operations.not_(a)
    assert result.population_count() == size - 2
    assert result.index_of(True) == 2
    assert_tail_clear(result)

    # operands are untouched
    assert list(a.truthy_indices()) == [0, 1]
    assert list(b.truthy_indices()) == [1, 2]


@pytest.mark.parametrize("size", SIZES)
def test_in_place_operations(size: int):
    """
    Tests that the mutating methods match the pure functions and return the receiver.
    """

    a = vector_with(size, 0, 1, size - 1)
    b = vector_with(size, 1, 2)

    for method, function in (
        (PackedBitVector.and_, operations.and_),
        (PackedBitVector.or_, operations.or_),
        (PackedBitVector.xor, operations.xor),
        (PackedBitVector.nand, operations.nand),
        (PackedBitVector.nor, operations.nor),
        (PackedBitVector.xnor, operations.xnor),
        (PackedBitVector.difference, operations.difference),
    ):
        target = a.clone()
        assert method(target, b) is target
        assert target == function(a, b)
        assert_tail_clear(target)

    target = a.clone()
    assert target.invert() is target
    assert target == operations.not_(a)
    assert_tail_clear(target)


def test_operators():
    """
    Tests the operator forms.
    """

    a = vector_with(40, 0, 1)
    b = vector_with(40, 1, 2)

    assert a & b == operations.and_(a, b)
    assert a | b == operations.or_(a, b)
    assert a ^ b == operations.xor(a, b)
    assert a - b == operations.difference(a, b)
    assert ~a == operations.not_(a)

    c = a.clone()
    original = c
    c &= b
    assert c is original
    assert list(c.truthy_indices()) == [1]

    c |= a
    c ^= b
    assert list(c.truthy_indices()) == [0, 2]

    c -= b
    assert list(c.truthy_indices()) == [0]

    with pytest.raises(TypeError):
        a & 1  # type: ignore


def test_algebraic_laws():
    """
    Tests identities that must hold for any vector.
    """

    a = vector_with(77, 0, 3, 31, 32, 50, 76)
    b = vector_with(77, 3, 4, 32, 60)

    assert operations.xor(a, a).is_empty()
    assert operations.difference(a, a).is_empty()
    assert operations.and_(a, a) == a
    assert operations.or_(a, a) == a
    assert operations.not_(operations.not_(a)) == a

    # De Morgan
    assert operations.not_(operations.and_(a, b)) == operations.or_(
        operations.not_(a), operations.not_(b)
    )
    assert operations.not_(operations.or_(a, b)) == operations.and_(
        operations.not_(a), operations.not_(b)
    )


def test_size_mismatch():
    """
    Tests that binary operations reject vectors of different sizes.
    """

    a = PackedBitVector(32)
    b = PackedBitVector(64)

    with pytest.raises(SizeMismatchError) as exc_info:
        operations.and_(a, b)

    assert exc_info.value.left_size == 32
    assert exc_info.value.right_size == 64
    assert isinstance(exc_info.value, ValueError)

    with pytest.raises(SizeMismatchError):
        operations.or_(a, b)

    with pytest.raises(SizeMismatchError):
        operations.difference(a, b)

    with pytest.raises(SizeMismatchError):
        a.xor(b)

    # same word count, different logical size
    with pytest.raises(SizeMismatchError):
        PackedBitVector(33).and_(PackedBitVector(40))

    with pytest.raises(SizeMismatchError):
        a & b


def test_invalid_operands():
    """
    Tests that non-vector operands are type errors.
    """

    vector = PackedBitVector(32)

    with pytest.raises(InvalidValueError):
        operations.and_(vector, [1, 2, 3])  # type: ignore

    with pytest.raises(InvalidValueError):
        operations.or_("not a vector", vector)  # type: ignore

    with pytest.raises(InvalidValueError):
        operations.not_(None)  # type: ignore


def test_equality():
    """
    Tests equality, including size mismatches.
    """

    a = PackedBitVector(100)
    b = PackedBitVector(100)
    assert operations.equals(a, b)
    assert operations.equals(a, a)

    a.set_bit(0, True).set_bit(99, True)
    b.set_bit(0, True).set_bit(99, True)
    assert a == b

    b.set_bit(50, True)
    assert not operations.equals(a, b)
    assert a != b

    assert not operations.equals(a, PackedBitVector(200))
    assert a != "not a vector"
