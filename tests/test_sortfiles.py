import pytest

from sysprog.coro import Scheduler
from sysprog.sortfiles import WorkerStats, main, run, sort_worker
from sysprog.sorting import SourceFile, write_numbers


@pytest.fixture
def number_files(tmp_path):
    contents = [[9, 4, 7, 1], [3, 3, -5], [8], [], [100, 2, 50, 6, 0]]
    paths = []
    for index, values in enumerate(contents):
        path = tmp_path / f"in{index}.txt"
        write_numbers(values, path)
        paths.append(str(path))
    return paths, contents


@pytest.mark.parametrize("count,latency", [(1, 1000000), (3, 1), (5, 10)])
def test_run_merges_everything(number_files, count, latency):
    paths, contents = number_files
    result = run(paths, count, latency)
    assert result == sorted(v for values in contents for v in values)


def test_run_rejects_bad_latency(number_files):
    paths, _ = number_files
    with pytest.raises(ValueError, match="latency"):
        run(paths, 2, 0)


def test_run_rejects_bad_count(number_files):
    paths, _ = number_files
    with pytest.raises(ValueError, match="N"):
        run(paths, 0, 100)


def test_workers_share_files_with_zero_quota():
    files = [SourceFile("a", [3, 1, 2]), SourceFile("b", [9, 7])]
    stats = [WorkerStats(), WorkerStats()]
    scheduler = Scheduler()
    for index, worker_stats in enumerate(stats):
        scheduler.spawn(sort_worker, f"w{index}", files, 0, worker_stats)
    finished = list(scheduler)
    assert [c.status for c in finished] == [0, 0]
    assert [f.values for f in files] == [[1, 2, 3], [7, 9]]
    assert all(f.is_sorted for f in files)
    assert all(s.switch_count > 0 for s in stats)


def test_worker_with_large_quota_never_switches(capsys):
    files = [SourceFile("a", [5, 4, 3]), SourceFile("b", [2, 1])]
    stats = WorkerStats()
    scheduler = Scheduler()
    scheduler.spawn(sort_worker, "solo", files, 10**12, stats)
    done = scheduler.wait()
    assert done.status == 0
    assert stats.switch_count == 0
    assert stats.worktime >= 0
    assert [f.values for f in files] == [[3, 4, 5], [1, 2]]
    out = capsys.readouterr().out
    assert "Started coroutine solo" in out
    assert "solo: switch count 0" in out


def test_main_success(number_files, capsys):
    paths, _ = number_files
    assert main(["-n", "2", "-t", "1000", *paths]) == 0
    out = capsys.readouterr().out
    assert "Latency: T=1000µs" in out
    assert "Coroutines: N=2" in out
    assert "Quota: T/N=500µs" in out
    assert out.count("Finished 0") == 2


def test_main_rejects_missing_latency(number_files, capsys):
    paths, _ = number_files
    assert main(["-n", "2", *paths]) == 1
    assert "latency" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "absent.txt")
    assert main(["-n", "1", "-t", "10", missing]) == 1
    assert "couldn't open" in capsys.readouterr().out