import pytest

from multicore_scheduler.models import ProcessState
from multicore_scheduler.process import ProcessRecord, TransitionError

from tests.helpers import details, record


def test_initial_state_follows_start_time():
    assert record(start_time=0).state == ProcessState.READY
    late = record(start_time=200)
    assert late.state == ProcessState.NOT_STARTED
    assert late.turnaround_time(500.0) == 0
    assert late.wait_time(500.0) == 0


def test_bursts_must_start_and_end_with_cpu():
    with pytest.raises(ValueError):
        ProcessRecord(details(1, [100, 50]))
    with pytest.raises(ValueError):
        ProcessRecord(details(1, []))


def test_total_cpu_time_is_sum_of_even_bursts():
    r = record(bursts=[100, 999, 200, 999, 300])
    assert r.total_cpu_time == 600
    assert r.remaining_time(0.0) == 600


def test_launch_sets_launch_and_queue_checkpoints():
    r = record(start_time=200)
    r.launch(250.0)
    assert r.state == ProcessState.READY
    assert r.turnaround_time(400.0) == 150.0
    assert r.wait_time(400.0) == 150.0


def test_dispatch_records_wait_and_starts_cpu_clock():
    r = record(bursts=[500])
    r.dispatch(0, 120.0)
    assert r.state == ProcessState.RUNNING
    assert r.core == 0
    assert r.wait_history == [120.0]
    assert r.wait_time(400.0) == 120.0
    assert r.cpu_time(200.0) == 80.0
    assert r.remaining_time(200.0) == 420.0


def test_cpu_time_is_capped_at_burst_length():
    r = record(bursts=[500])
    r.dispatch(0, 0.0)
    assert r.cpu_time(900.0) == 500.0
    assert r.remaining_time(900.0) == 0.0


def test_repeated_reads_are_identical():
    r = record(bursts=[500, 100, 300])
    r.dispatch(0, 40.0)
    first = r.snapshot(130.0)
    second = r.snapshot(130.0)
    third = r.snapshot(130.0)
    assert first == second == third
    assert r.wait_history == [40.0]


def test_preemption_keeps_residual_burst():
    r = record(bursts=[250])
    r.dispatch(0, 0.0)
    r.preempt(100.0)
    assert r.state == ProcessState.READY
    assert r.core is None
    assert r.bursts[0] == 150.0
    assert r.original_bursts[0] == 250
    assert r.cpu_time(100.0) == 100.0
    assert r.remaining_time(180.0) == 150.0

    r.dispatch(1, 110.0)
    assert r.wait_history == [0.0, 10.0]
    assert r.cpu_time(160.0) == 150.0
    assert not r.is_burst_complete(259.0)
    assert r.is_burst_complete(260.0)


def test_block_and_unblock_cycle():
    r = record(bursts=[100, 50, 200])
    r.dispatch(0, 0.0)
    r.block(100.0)
    assert r.state == ProcessState.IO
    assert r.current_burst == 1
    assert r.core is None
    assert r.cpu_time(120.0) == 100.0
    assert r.remaining_time(120.0) == 200.0
    assert r.wait_time(120.0) == 0.0
    assert not r.is_burst_complete(140.0)
    assert r.is_burst_complete(150.0)

    r.unblock(150.0)
    assert r.state == ProcessState.READY
    assert r.current_burst == 2
    assert r.wait_time(170.0) == 20.0

    r.dispatch(1, 170.0)
    assert r.wait_history == [0.0, 20.0]


def test_terminate_freezes_metrics():
    r = record(bursts=[500])
    r.dispatch(0, 10.0)
    r.terminate(510.0)
    assert r.state == ProcessState.TERMINATED
    assert r.core is None
    assert r.current_burst == len(r.bursts)
    assert r.remaining_time(9999.0) == 0.0
    assert r.cpu_time(9999.0) == 500.0
    assert r.wait_time(9999.0) == 10.0
    assert r.turnaround_time(9999.0) == 510.0


def test_turnaround_accounts_for_cpu_wait_and_io():
    r = record(bursts=[100, 40, 60])
    r.dispatch(0, 20.0)      # waited 20
    r.preempt(70.0)          # ran 50, residual 50
    r.dispatch(0, 90.0)      # waited 20
    assert r.is_burst_complete(140.0)
    r.block(140.0)
    r.unblock(185.0)         # 45 ms in i/o
    r.dispatch(1, 200.0)     # waited 15
    assert r.is_burst_complete(260.0)
    r.terminate(260.0)

    turnaround = r.turnaround_time(300.0)
    cpu = r.cpu_time(300.0)
    wait = r.wait_time(300.0)
    assert cpu == 160.0
    assert wait == 55.0
    assert turnaround == 260.0
    assert turnaround >= cpu + wait
    assert turnaround == pytest.approx(cpu + wait + 45.0)


def test_remaining_time_never_increases_while_running():
    r = record(bursts=[300])
    r.dispatch(0, 0.0)
    samples = [r.remaining_time(t) for t in (0.0, 50.0, 50.0, 120.0, 299.0, 300.0, 450.0)]
    assert all(a >= b for a, b in zip(samples, samples[1:]))
    assert all(s >= 0 for s in samples)
    assert samples[-1] == 0.0


def test_wrong_state_transitions_raise():
    r = record()
    with pytest.raises(TransitionError):
        r.block(0.0)
    with pytest.raises(TransitionError):
        r.launch(0.0)

    late = record(start_time=100)
    with pytest.raises(TransitionError):
        late.dispatch(0, 100.0)


def test_snapshot_reports_seconds():
    r = record(pid=7, priority=3, bursts=[500])
    r.dispatch(2, 250.0)
    snap = r.snapshot(500.0)
    assert snap.pid == 7
    assert snap.priority == 3
    assert snap.state == ProcessState.RUNNING
    assert snap.core == 2
    assert snap.turnaround_time == pytest.approx(0.5)
    assert snap.wait_time == pytest.approx(0.25)
    assert snap.cpu_time == pytest.approx(0.25)
    assert snap.remaining_time == pytest.approx(0.25)
