import pytest

from kafkit.assignment import Assignment, Assignments, from_map


def test_from_map_sorts_and_dedups_partitions():
    a = from_map({"t": [3, 1, 3, 2, 1]})
    ref = a.topic_ref("t")
    assert a[ref].partitions == (1, 2, 3)


def test_from_map_orders_topics():
    a = from_map({"zeta": [], "alpha": [0], "mid": [1]})
    assert [x.topic for x in a] == ["alpha", "mid", "zeta"]
    assert len(a) == 3


def test_empty_partitions_kept_empty():
    a = from_map({"all": []})
    assert a[a.topic_ref("all")] == Assignment("all", ())


def test_topic_ref_resolves_to_same_topic():
    topics = {"b": [1], "a": [2], "c": [0, 0]}
    a = from_map(topics)
    for name in topics:
        ref = a.topic_ref(name)
        assert a[ref].topic == name


def test_topic_ref_missing():
    a = from_map({"b": [1], "d": [2]})
    assert a.topic_ref("a") is None
    assert a.topic_ref("c") is None
    assert a.topic_ref("e") is None


def test_constructor_sorts_assignments():
    a = Assignments([Assignment("y", (1,)), Assignment("x", (0,))])
    assert [x.topic for x in a] == ["x", "y"]
    assert a[a.topic_ref("y")].partitions == (1,)


@pytest.mark.parametrize("bad_ref", [5, -1])
def test_invalid_reference_raises(bad_ref):
    a = from_map({"t": [0]})
    assert a[a.topic_ref("t")].topic == "t"
    with pytest.raises(IndexError):
        a.__getitem__(bad_ref)


def test_empty_assignments():
    a = from_map({})
    assert len(a) == 0
    assert list(a) == []
    assert a.topic_ref("t") is None