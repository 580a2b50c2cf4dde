from itertools import islice

import pytest

from autosweeper.worklist import CircularWorklist


def make_list(*values):
    worklist = CircularWorklist()
    handles = [worklist.append(v) for v in values]
    return worklist, handles


def test_empty_worklist():
    worklist = CircularWorklist()

    assert len(worklist) == 0
    assert not worklist
    assert worklist.head is None and worklist.tail is None
    assert list(worklist.traverse()) == []


def test_single_node_links_to_itself():
    worklist, (h,) = make_list("a")

    assert worklist.head == h and worklist.tail == h
    assert worklist.next(h) == h
    assert worklist.prev(h) == h


def test_following_next_len_times_returns_to_head():
    worklist, handles = make_list("a", "b", "c", "d")

    node = worklist.head
    for _ in range(len(worklist)):
        node = worklist.next(node)

    assert node == worklist.head
    assert worklist.prev(worklist.head) == worklist.tail
    assert worklist.next(worklist.tail) == worklist.head


def test_traversal_is_unbounded():
    worklist, _ = make_list("a", "b", "c")

    values = [worklist.value(h) for h in islice(worklist.traverse(), 7)]

    assert values == ["a", "b", "c", "a", "b", "c", "a"]


def test_remove_middle_relinks_neighbors():
    worklist, (a, b, c, d) = make_list("a", "b", "c", "d")

    worklist.remove(b)

    assert len(worklist) == 3
    assert b not in worklist
    assert worklist.next(a) == c
    assert worklist.prev(c) == a
    assert [worklist.value(h) for h in islice(worklist.traverse(), 3)] == ["a", "c", "d"]


def test_remove_head_and_tail_keeps_ring_closed():
    worklist, (a, b, c) = make_list("a", "b", "c")

    worklist.remove(a)
    assert worklist.head == b
    assert worklist.next(c) == b and worklist.prev(b) == c

    worklist.remove(c)
    assert worklist.head == b and worklist.tail == b
    assert worklist.next(b) == b


def test_remove_last_node_empties_list():
    worklist, (a,) = make_list("a")

    worklist.remove(a)

    assert len(worklist) == 0
    assert worklist.head is None and worklist.tail is None


def test_remove_unlinked_node_raises():
    worklist, (a, _) = make_list("a", "b")
    worklist.remove(a)

    with pytest.raises(KeyError):
        worklist.remove(a)
    with pytest.raises(KeyError):
        worklist.remove(42)


def test_traversal_continues_after_removing_current_node():
    worklist, _ = make_list("a", "b", "c")

    seen = []
    for handle in worklist.traverse():
        seen.append(worklist.value(handle))
        if worklist.value(handle) != "b" or len(seen) > 3:
            worklist.remove(handle)

    assert seen == ["a", "b", "c", "b"]
    assert len(worklist) == 0


def test_removed_node_keeps_its_value():
    worklist, (a, _) = make_list("a", "b")
    worklist.remove(a)

    assert worklist.value(a) == "a"
