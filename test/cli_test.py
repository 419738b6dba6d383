import json
import logging

import pytest

from cli import main

LOG = (
    "# work\n"
    "i 2022/01/03 09:00:00 e:fc:fred\n"
    "o 2022/01/03 18:00:00\n"
    "i 2022/01/04 09:00:00\n"
)


@pytest.fixture
def timelog(tmp_path, monkeypatch):
    monkeypatch.delenv("TIMELOG", raising=False)
    path = tmp_path / "timelog"
    path.write_text(LOG, encoding="utf-8")
    return path


def test_prints_summary_table(timelog, capsys):
    status = main(["--log", str(timelog), "--now", "2022/01/04 12:00:00"])

    out = capsys.readouterr().out
    assert status == 0
    assert "Number of days worked:" in out
    assert f"{'Worked today:':<45}3 hours, 0 minutes" in out
    assert "Cumulative overtime per yesterday:" in out
    assert "1 hours, 0 minutes" in out
    assert out.splitlines()[-1].endswith("16:00")


def test_prints_json(timelog, capsys):
    status = main(["--log", str(timelog), "--now", "2022/01/04 12:00:00", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert status == 0
    assert payload["num_days_worked"] == 2
    assert payload["time_to_leave"] == "2022-01-04T16:00:00"


def test_uses_timelog_environment_variable(timelog, monkeypatch, capsys):
    monkeypatch.setenv("TIMELOG", str(timelog))

    assert main(["--now", "2022/01/04 12:00:00"]) == 0
    assert "Total time worked:" in capsys.readouterr().out


def test_reports_errors_without_summary(tmp_path, capsys):
    path = tmp_path / "timelog"
    path.write_text("o 2022/01/04 09:00:00\n", encoding="utf-8")

    status = main(["--log", str(path), "--now", "2022/01/04 12:00:00"])

    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert "clock out on line 1, no previous clock in" in captured.err


def test_missing_log(tmp_path, capsys):
    assert main(["--log", str(tmp_path / "missing")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_rejects_bad_now(timelog):
    with pytest.raises(SystemExit):
        main(["--log", str(timelog), "--now", "yesterday"])


@pytest.fixture
def bare_root_logger(monkeypatch):
    monkeypatch.setattr(logging.root, "handlers", [])
    monkeypatch.setattr(logging.root, "level", logging.root.level)


def test_invalid_log_level_is_reported(timelog, monkeypatch, bare_root_logger, capsys):
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    status = main(["--log", str(timelog), "--now", "2022/01/04 12:00:00"])

    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert "invalid LOG_LEVEL [VERBOSE]" in captured.err


def test_log_level_from_environment(timelog, monkeypatch, bare_root_logger, capsys):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    status = main(["--log", str(timelog), "--now", "2022/01/04 12:00:00"])

    assert status == 0
    assert logging.root.level == logging.DEBUG
    assert "Total time worked:" in capsys.readouterr().out
