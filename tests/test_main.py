# tests/test_main.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import insert

from task_cli.cli import main as main_mod
from task_cli.config import Settings
from task_cli.tasks.task_store import TaskStore, tasks_table
from task_cli.tasks.task_time import GapPolicy

from .fakes import FakeConsole


def _settings(
    tmp_path: Path,
    *,
    url: str | None,
    auto_create: bool = True,
    timezone_name: str = "UTC",
    gap_policy: GapPolicy = GapPolicy.ERROR,
) -> Settings:
    return Settings(
        app_name="task-cli-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        database_url=url,
        pool_size=5,
        pool_timeout=5.0,
        auto_create_schema=auto_create,
        sql_echo=False,
        timezone_name=timezone_name,
        dst_gap_policy=gap_policy,
    )


@pytest.fixture(autouse=True)
def _logging(restore_root_logging) -> None:
    return None


def test_normal_exit_returns_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    settings = _settings(tmp_path, url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)
    console = FakeConsole(["1", "Write tests", "5"])

    assert main_mod.main(console) == main_mod.EXIT_OK
    assert "Connected to database!" in capsys.readouterr().out
    assert "Task 'Write tests' added successfully!" in console.lines
    assert (tmp_path / "data" / "task_cli.log").exists()


def test_missing_database_url_exits_with_config_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(main_mod, "get_settings", lambda: _settings(tmp_path, url=None))

    assert main_mod.main(FakeConsole(["5"])) == main_mod.EXIT_CONFIG
    assert "DATABASE_URL must be set" in capsys.readouterr().err


def test_missing_table_exits_non_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    settings = _settings(tmp_path, url=f"sqlite:///{tmp_path / 'bare.sqlite3'}", auto_create=False)
    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)

    assert main_mod.main(FakeConsole(["2", "5"])) == main_mod.EXIT_FAILURE
    assert "Error:" in capsys.readouterr().err


def _seed_gap_row(url: str) -> None:
    """One task stamped 02:30 on the US spring-forward night (no such New York time)."""
    seed = TaskStore(url)
    try:
        seed.ensure_schema()
        with seed.engine.begin() as conn:
            conn.execute(
                insert(tasks_table).values(description="gap", created_at=datetime(2024, 3, 10, 2, 30))
            )
    finally:
        seed.close()


def test_dst_gap_on_list_exits_non_zero_by_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    url = f"sqlite:///{tmp_path / 'gap.sqlite3'}"
    _seed_gap_row(url)
    settings = _settings(tmp_path, url=url, timezone_name="America/New_York")
    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)

    assert main_mod.main(FakeConsole(["2", "5"])) == main_mod.EXIT_FAILURE
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "non-existent local time" in err


def test_dst_gap_on_list_with_shift_policy_keeps_running(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    url = f"sqlite:///{tmp_path / 'gap.sqlite3'}"
    _seed_gap_row(url)
    settings = _settings(
        tmp_path, url=url, timezone_name="America/New_York", gap_policy=GapPolicy.SHIFT
    )
    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)
    console = FakeConsole(["2", "5"])

    assert main_mod.main(console) == main_mod.EXIT_OK
    assert any("(Created: 2024-03-10 03:30:00)" in line for line in console.lines)
    assert console.lines[-1] == "Exiting application. Goodbye!"
