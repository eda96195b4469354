"""Tests for commits, id generation and clocks."""

from datetime import datetime, timedelta, timezone

import pytest

from chainlog.ledger import Commit, CommitIdGenerator, LogicalClock, SystemClock, reset_ids
from chainlog.ledger.ids import default_generator


@pytest.fixture
def generator():
    return CommitIdGenerator()


@pytest.fixture
def clock():
    return LogicalClock(start=datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc))


# ========== Commit ==========

def test_create_assigns_id_timestamp_and_link(generator, clock):
    """Test that create fills in id and timestamp from its sources."""
    first = Commit.create("first", id_generator=generator, clock=clock)
    second = Commit.create("second", first, id_generator=generator, clock=clock)

    assert first.id == "0"
    assert second.id == "1"
    assert first.previous is None
    assert second.previous is first
    assert second.timestamp > first.timestamp
    assert first.timestamp == datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc)


def test_render_format(generator, clock):
    """Test the '<id> at <timestamp>: <message>' rendering."""
    commit = Commit.create("Initial import", id_generator=generator, clock=clock)

    assert commit.render() == "0 at 2024-03-01 at 12:30:00 UTC: Initial import"
    assert str(commit) == commit.render()


def test_render_custom_format(generator, clock):
    """Test rendering with a caller-supplied timestamp format."""
    commit = Commit.create("msg", id_generator=generator, clock=clock)

    assert commit.render("%H:%M") == "0 at 12:30: msg"


def test_render_naive_timestamp_has_no_trailing_space():
    """Test that an empty %Z does not leave stray whitespace."""
    commit = Commit(id="7", message="naive", timestamp=datetime(2024, 1, 2, 3, 4, 5))

    assert commit.render() == "7 at 2024-01-02 at 03:04:05: naive"


def test_to_dict(generator, clock):
    """Test dictionary conversion."""
    first = Commit.create("a", id_generator=generator, clock=clock)
    second = Commit.create("b", first, id_generator=generator, clock=clock)

    data = second.to_dict()
    assert data["id"] == "1"
    assert data["message"] == "b"
    assert data["previous_id"] == "0"
    assert data["timestamp"] == second.timestamp.isoformat()
    assert first.to_dict()["previous_id"] is None


def test_commits_compare_by_identity():
    """Test that two commits with equal fields are still distinct nodes."""
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    a = Commit(id="1", message="same", timestamp=stamp)
    b = Commit(id="1", message="same", timestamp=stamp)

    assert a != b
    assert a == a


def test_repr_does_not_walk_chain(generator, clock):
    """Test that repr only mentions the previous id."""
    tail = Commit.create("tail", id_generator=generator, clock=clock)
    head = Commit.create("head", tail, id_generator=generator, clock=clock)

    text = repr(head)
    assert "previous=0" in text
    assert "tail" not in text


def test_create_uses_process_defaults():
    """Test that create falls back to the default generator and system clock."""
    reset_ids()
    before = datetime.now().astimezone()

    commit = Commit.create("defaults")

    assert commit.id == "0"
    assert commit.timestamp >= before - timedelta(seconds=1)
    assert default_generator().peek() == 1
    reset_ids()


def test_reset_ids_restarts_counter():
    """Test that reset_ids makes the default counter start over."""
    Commit.create("one")
    Commit.create("two")

    reset_ids()

    assert Commit.create("again").id == "0"
    reset_ids()


def test_commit_fields_are_read_only(generator, clock):
    """Test that id, message and timestamp cannot be reassigned."""
    commit = Commit.create("fixed", id_generator=generator, clock=clock)

    for name, value in [("id", "99"), ("message", "changed"), ("timestamp", datetime(2000, 1, 1))]:
        with pytest.raises(AttributeError):
            setattr(commit, name, value)

    assert commit.id == "0"
    assert commit.message == "fixed"
    assert commit.timestamp == datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc)


def test_commit_previous_can_be_relinked(generator, clock):
    older = Commit.create("older", id_generator=generator, clock=clock)
    newer = Commit("7", "newer", clock.now())

    newer.previous = older
    assert newer.previous is older

    newer.previous = None
    assert newer.previous is None


# ========== CommitIdGenerator ==========

def test_generator_is_strictly_increasing(generator):
    """Test that ids increase by one as decimal text."""
    ids = [generator.next_id() for _ in range(12)]

    assert ids == [str(i) for i in range(12)]


def test_generator_custom_start_and_reset():
    """Test start value, peek and reset."""
    generator = CommitIdGenerator(start=100)
    assert generator.next_id() == "100"
    assert generator.peek() == 101

    generator.reset()
    assert generator.next_id() == "100"

    generator.reset(start=5)
    assert generator.next_id() == "5"


def test_generator_rejects_negative_start():
    with pytest.raises(ValueError):
        CommitIdGenerator(start=-1)


# ========== Clocks ==========

def test_logical_clock_steps_forward():
    """Test that every reading is exactly one step later."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    clock = LogicalClock(start=start, step=timedelta(minutes=5))

    readings = [clock.now() for _ in range(3)]

    assert readings == [start, start + timedelta(minutes=5), start + timedelta(minutes=10)]


def test_logical_clock_rejects_non_positive_step():
    with pytest.raises(ValueError):
        LogicalClock(step=timedelta(0))


def test_logical_clock_naive_start_is_utc():
    """Test that a naive start is read as UTC."""
    clock = LogicalClock(start=datetime(2030, 1, 1))

    now = clock.now()

    assert now.tzinfo is timezone.utc
    assert now == datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert now > SystemClock().now()


def test_system_clock_is_timezone_aware():
    now = SystemClock().now()

    assert now.tzinfo is not None
