import json
from pathlib import Path

from multicore_scheduler.cli import build_parser, main


def _write_config(tmp_path: Path, algorithm="RR") -> Path:
    p = tmp_path / "config.json"
    p.write_text(
        json.dumps(
            {
                "cores": 2,
                "algorithm": algorithm,
                "context_switch": 5,
                "time_slice": 40,
                "processes": [
                    {"pid": 1, "priority": 1, "start_time": 0, "bursts": [60, 30, 40]},
                    {"pid": 2, "priority": 0, "start_time": 20, "bursts": [50]},
                ],
            }
        )
    )
    return p


def test_parser_requires_command():
    parser = build_parser()
    args = parser.parse_args(["run", "cfg.json", "-a", "pp", "--cores", "4"])
    assert args.command == "run"
    assert args.algorithm == "pp"
    assert args.cores == 4


def test_run_without_live_table(tmp_path: Path, capsys):
    assert main(["run", str(_write_config(tmp_path)), "--no-live", "--gantt"]) == 0
    out = capsys.readouterr().out
    assert "Final process states" in out
    assert "Gantt Chart" in out
    assert "Run statistics" in out
    assert "Round Robin" in out


def test_run_with_live_table(tmp_path: Path, capsys):
    assert main(["run", str(_write_config(tmp_path)), "-a", "sjf"]) == 0
    out = capsys.readouterr().out
    assert "SJF" in out
    assert "Run statistics" in out


def test_compare(tmp_path: Path, capsys):
    assert main(["compare", str(_write_config(tmp_path)), "-a", "fcfs", "pp"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "FCFS" in out
    assert "Preemptive Priority" in out


def test_bad_config_reports_error(tmp_path: Path, capsys):
    assert main(["run", str(tmp_path / "missing.json")]) == 1
    assert "Error" in capsys.readouterr().out


def test_bad_override_reports_error(tmp_path: Path, capsys):
    assert main(["run", str(_write_config(tmp_path)), "--cores", "0"]) == 1
    assert main(["compare", str(_write_config(tmp_path)), "-a", "lottery"]) == 1
