import pytest

from rr_scheduler.errors import InvalidInput
from rr_scheduler.models import Process, ProcessState


def test_create_initializes_metrics():
    p = Process.create("P1", 2, 6)
    assert p.remaining_time == 6
    assert p.waiting_time == p.turnaround_time == p.completion_time == 0
    assert p.start_time is None
    assert p.state is ProcessState.READY


def test_create_coerces_text_input():
    p = Process.create(" 7 ", "0", " 3")
    assert p.pid == "7"
    assert (p.arrival_time, p.burst_time) == (0, 3)


def test_integer_id_becomes_text():
    assert Process.create(3, 0, 1).pid == "3"


@pytest.mark.parametrize(
    "pid, arrival, burst",
    [
        ("", 0, 1),
        ("   ", 0, 1),
        (None, 0, 1),
        ("P1", -1, 1),
        ("P1", 0, 0),
        ("P1", "abc", 1),
        ("P1", 0, 2.5),
        ("P1", True, 1),
    ],
)
def test_create_rejects_bad_fields(pid, arrival, burst):
    with pytest.raises(InvalidInput):
        Process.create(pid, arrival, burst)


def test_reset_restores_initial_state():
    p = Process.create("P1", 1, 4)
    p.remaining_time = 0
    p.waiting_time = 3
    p.turnaround_time = 7
    p.completion_time = 8
    p.start_time = 2
    p.state = ProcessState.TERMINATED

    p.reset()

    assert p.remaining_time == 4
    assert p.waiting_time == p.turnaround_time == p.completion_time == 0
    assert p.start_time is None
    assert p.state is ProcessState.READY


def test_direct_construction_is_validated():
    with pytest.raises(InvalidInput):
        Process("P1", 0, 0)
    with pytest.raises(InvalidInput):
        Process("", 0, 2)
    with pytest.raises(InvalidInput):
        Process("P1", -3, 2)


def test_direct_construction_normalises_fields():
    p = Process(3, "1", 4.0)
    assert p.pid == "3"
    assert (p.arrival_time, p.burst_time, p.remaining_time) == (1, 4, 4)


def test_whole_floats_accepted_from_json():
    p = Process.create("P1", 2.0, 5.0)
    assert (p.arrival_time, p.burst_time) == (2, 5)
    assert isinstance(p.arrival_time, int)
