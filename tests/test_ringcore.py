import threading

import pytest

from syslab.ringcore import (
    CACHE_LINE_SIZE,
    RING_SZ_MASK,
    HeadTail,
    QueueBehavior,
    RingFlag,
    RingState,
    align_ceil,
    is_power_of_two,
    memsize,
)


def _enqueue(state, n, behavior, single):
    got, old, new, free = state.move_prod_head(single, n, behavior)
    if got:
        state.update_tail(state.prod, old, new, single)
    return got, free


def _dequeue(state, n, behavior, single):
    got, old, new, entries = state.move_cons_head(single, n, behavior)
    if got:
        state.update_tail(state.cons, old, new, single)
    return got, entries


@pytest.mark.parametrize("x", [1, 2, 4, 1024, 1 << 31])
def test_power_of_two_true(x):
    assert is_power_of_two(x)


@pytest.mark.parametrize("x", [3, 6, 1000, 1025])
def test_power_of_two_false(x):
    assert not is_power_of_two(x)


def test_align_ceil():
    assert align_ceil(1, CACHE_LINE_SIZE) == 64
    assert align_ceil(64, CACHE_LINE_SIZE) == 64
    assert align_ceil(65, CACHE_LINE_SIZE) == 128


def test_memsize_is_cache_aligned_and_grows_with_slots():
    small = memsize(1024)
    large = memsize(2048)
    assert small % CACHE_LINE_SIZE == 0
    assert large % CACHE_LINE_SIZE == 0
    assert large - small == 1024 * 8


@pytest.mark.parametrize("count", [3, 1000, RING_SZ_MASK + 1, -4])
def test_memsize_rejects_bad_count(count):
    with pytest.raises(ValueError):
        memsize(count)


def test_ring_state_init():
    state = RingState(1024, RingFlag.SP_ENQ)
    assert state.size == 1024
    assert state.mask == 1023
    assert state.capacity == 1023
    assert state.prod.single is True
    assert state.cons.single is False
    assert state.count() == 0
    assert state.free_count() == 1023


def test_ring_state_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        RingState(100)


def test_ring_state_rejects_zero():
    with pytest.raises(ValueError):
        RingState(0)


def test_enqueue_then_dequeue_counts():
    state = RingState(16)
    got, free = _enqueue(state, 8, QueueBehavior.VARIABLE, False)
    assert got == 8
    assert free == state.capacity
    assert state.count() == 8
    assert state.free_count() == state.capacity - 8
    got, entries = _dequeue(state, 8, QueueBehavior.VARIABLE, False)
    assert got == 8
    assert entries == 8
    assert state.count() == 0


def test_fixed_enqueue_all_or_nothing():
    state = RingState(8)
    got, _ = _enqueue(state, 10, QueueBehavior.FIXED, True)
    assert got == 0
    assert state.prod.head == 0
    assert state.count() == 0


def test_variable_enqueue_fills_to_capacity():
    state = RingState(8)
    got, _ = _enqueue(state, 10, QueueBehavior.VARIABLE, True)
    assert got == state.capacity
    assert state.free_count() == 0


def test_dequeue_from_empty_returns_zero():
    state = RingState(8)
    for behavior in QueueBehavior:
        got, entries = _dequeue(state, 1, behavior, True)
        assert got == 0
        assert entries == 0


def test_fixed_dequeue_needs_enough_entries():
    state = RingState(8)
    _enqueue(state, 3, QueueBehavior.FIXED, True)
    got, entries = _dequeue(state, 4, QueueBehavior.FIXED, True)
    assert got == 0
    assert entries == 3
    got, _ = _dequeue(state, 4, QueueBehavior.VARIABLE, True)
    assert got == 3


def test_indexes_wrap_at_32_bits():
    state = RingState(8)
    start = 0xFFFFFFFE
    for ht in (state.prod, state.cons):
        ht.head = ht.tail = start
    got, _ = _enqueue(state, 5, QueueBehavior.FIXED, True)
    assert got == 5
    assert state.prod.tail == (start + 5) & 0xFFFFFFFF
    assert state.prod.tail < start
    assert state.count() == 5
    got, _ = _dequeue(state, 5, QueueBehavior.FIXED, True)
    assert got == 5
    assert state.count() == 0


def test_update_tail_single_sets_value():
    state = RingState(4)
    ht = HeadTail()
    state.update_tail(ht, 7, 9, True)
    assert ht.tail == 9


def test_multi_producer_threads_reserve_disjoint_ranges():
    state = RingState(1024)
    ranges = []
    lock = threading.Lock()

    def producer():
        for _ in range(50):
            got, old, new, _ = state.move_prod_head(False, 2, QueueBehavior.FIXED)
            assert got == 2
            with lock:
                ranges.append((old, new))
            state.update_tail(state.prod, old, new, False)

    threads = [threading.Thread(target=producer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert state.count() == 4 * 50 * 2
    assert state.prod.head == state.prod.tail
    starts = sorted(old for old, _ in ranges)
    assert starts == list(range(0, 400, 2))
    assert all(new - old == 2 for old, new in ranges)


def test_flags_values():
    assert int(RingFlag.SP_ENQ) == 0x0001
    assert int(RingFlag.SC_DEQ) == 0x0002
    assert int(RingFlag.EXACT_SZ) == 0x0004
    state = RingState(4, RingFlag.SP_ENQ | RingFlag.SC_DEQ)
    assert state.prod.single and state.cons.single