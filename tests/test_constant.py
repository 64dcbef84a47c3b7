import pytest

from compiler.error import ConstantPoolTooLargeError, StringPoolTooLargeError
from vm.chunk import Chunk
from vm.constant import ConstantTable, TooManyConstantsException, ConstantNotFoundException \
                        , MAX_POOL_SIZE


def test_add_constant_is_idempotent():
    table = ConstantTable()
    constant_id = table.add_constant(1.5)
    assert table.add_constant(1.5) == constant_id
    assert len(table) == 1


def test_constant_ids_are_dense_and_stable():
    table = ConstantTable()
    assert [table.add_constant(x) for x in (3.0, 1.0, 2.0, 1.0, 3.0)] == [0, 1, 2, 1, 0]
    assert table.get_constants() == [3.0, 1.0, 2.0]
    assert table.get_constant(2) == 2.0


def test_string_table_interns_by_value():
    table = ConstantTable()
    name1 = "".join(["na", "me"])
    name2 = "".join(["n", "ame"])
    assert table.add_constant(name1) == table.add_constant(name2)


def test_table_holds_exactly_max_pool_size_entries():
    table = ConstantTable()

    for i in range(MAX_POOL_SIZE):
        assert table.add_constant(float(i)) == i

    # re-adding an existing entry still works when the table is full
    assert table.add_constant(0.0) == 0

    with pytest.raises(TooManyConstantsException):
        table.add_constant(float(MAX_POOL_SIZE))


def test_get_unknown_constant():
    table = ConstantTable()
    table.add_constant(1.0)

    with pytest.raises(ConstantNotFoundException):
        table.get_constant(1)


def test_clear():
    table = ConstantTable()
    table.add_constant("x")
    table.clear()
    assert len(table) == 0
    assert table.add_constant("y") == 0


def test_chunk_reports_pool_overflow_with_location():
    chunk = Chunk()

    for i in range(MAX_POOL_SIZE):
        chunk.add_constant(None, i)
        chunk.add_string(None, "s{}".format(i))

    with pytest.raises(ConstantPoolTooLargeError):
        chunk.add_constant(None, 1000)

    with pytest.raises(StringPoolTooLargeError):
        chunk.add_string(None, "one too many")

    assert len(chunk.constants) == MAX_POOL_SIZE
    assert len(chunk.strings) == MAX_POOL_SIZE
