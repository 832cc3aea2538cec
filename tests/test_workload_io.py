from pathlib import Path

import pytest

from rr_scheduler.errors import InvalidInput
from rr_scheduler.models import Process
from rr_scheduler.workload_io import load_workload, sample_processes


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"id":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].pid == "B"
    assert procs[1].arrival_time == 1
    assert procs[1].remaining_time == 2


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].burst_time == 2


def test_load_csv_rejects_bad_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,0\n")
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_load_json_rejects_missing_field(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0}]')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_load_json_rejects_non_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A"}')
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("")
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_sample_processes():
    procs = sample_processes()
    assert [(p.pid, p.arrival_time, p.burst_time) for p in procs] == [
        ("1", 0, 8),
        ("2", 1, 4),
        ("3", 2, 9),
        ("4", 3, 5),
    ]


@pytest.mark.parametrize("suffix", [".csv", ".json"])
def test_non_utf8_workload_is_invalid_input(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfepid,arrival_time,burst_time\n")
    with pytest.raises(InvalidInput):
        load_workload(p)


def test_load_json_accepts_whole_floats(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":1.0,"burst_time":3.0}]')
    procs = load_workload(p)
    assert (procs[0].arrival_time, procs[0].burst_time) == (1, 3)
