import pytest

from syslab.fifo import FifoList


def test_new_list_is_empty():
    lst = FifoList()
    assert lst.is_empty()
    assert len(lst) == 0
    assert list(lst) == []


def test_push_back_sets_head():
    lst = FifoList()
    lst.push_back(10)
    assert not lst.is_empty()
    assert list(lst) == [10]


def test_pop_front_returns_data_and_empties():
    lst = FifoList()
    lst.push_back(10)
    assert lst.pop_front() == 10
    assert lst.is_empty()


def test_fifo_order_and_reuse_after_empty():
    lst = FifoList()
    for value in (1, 2, 3):
        lst.push_back(value)
    assert [lst.pop_front() for _ in range(3)] == [1, 2, 3]
    lst.push_back(4)
    assert list(lst) == [4]
    assert len(lst) == 1


def test_clear():
    lst = FifoList()
    lst.push_back(10)
    lst.push_back(11)
    lst.clear()
    assert lst.is_empty()
    assert len(lst) == 0


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        FifoList().pop_front()