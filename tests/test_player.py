from rr_scheduler.engine import RoundRobinScheduler
from rr_scheduler.player import HistoryPlayer, snapshot_at


def _idle_gap_history():
    s = RoundRobinScheduler()
    s.add("P1", 0, 2)
    s.add("P2", 5, 2)
    s.run(3)
    return s.history  # times: 0, 2, 3, 4, 5, 5, 7


def test_step_is_clamped():
    player = HistoryPlayer(_idle_gap_history())
    assert player.step_backward().time == 0
    assert player.index == 0
    for _ in range(20):
        player.step_forward()
    assert player.index == len(player) - 1
    assert player.at_end
    assert player.current.time == 7


def test_jump_out_of_range_is_ignored():
    player = HistoryPlayer(_idle_gap_history())
    player.jump_to(3)
    player.jump_to(99)
    player.jump_to(-1)
    assert player.index == 3


def test_seek_time_shows_last_snapshot_at_or_before():
    history = _idle_gap_history()
    player = HistoryPlayer(history)

    assert player.seek_time(5).current_pid == "P2"
    assert player.index == 5
    assert player.seek_time(6) is history[5]
    assert player.seek_time(1) is history[0]
    assert player.seek_time(100) is history[-1]


def test_snapshot_at_before_first_frame():
    s = RoundRobinScheduler()
    s.add("P1", 3, 1)
    s.run(1)
    assert snapshot_at(s.history, 0) is None
    assert snapshot_at(s.history, 1).time == 1


def test_frames_play_from_cursor_to_end():
    history = _idle_gap_history()
    player = HistoryPlayer(history)
    player.jump_to(4)
    assert [snap.time for snap in player.frames()] == [5, 5, 7]
    assert player.at_end

    player.reset()
    assert player.index == 0


def test_empty_history():
    player = HistoryPlayer(())
    assert player.current is None
    assert player.step_forward() is None
    assert list(player.frames()) == []
