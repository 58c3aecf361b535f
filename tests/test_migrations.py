import asyncio

from alembic import command

from api.database.migrations import ALEMBIC_INI, MigrationRunner


def test_disabled_runner_is_ready_immediately():
    runner = MigrationRunner(enabled=False)

    runner.start()

    assert runner.is_ready()


async def test_successful_upgrade_marks_ready(monkeypatch):
    calls = []
    monkeypatch.setattr(command, "upgrade", lambda cfg, revision: calls.append((cfg, revision)))
    runner = MigrationRunner(enabled=True)
    assert not runner.is_ready()

    await runner.run()

    assert runner.is_ready()
    [(cfg, revision)] = calls
    assert revision == "head"
    assert cfg.config_file_name == str(ALEMBIC_INI)
    assert cfg.attributes["configure_logger"] is False


async def test_failed_upgrade_stays_not_ready(monkeypatch):
    def broken_upgrade(cfg, revision):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(command, "upgrade", broken_upgrade)
    runner = MigrationRunner(enabled=True)

    await runner.run()

    assert not runner.is_ready()


async def test_start_runs_in_background(monkeypatch):
    monkeypatch.setattr(command, "upgrade", lambda cfg, revision: None)
    runner = MigrationRunner(enabled=True)

    runner.start()
    assert not runner.is_ready()
    await asyncio.wait_for(runner._task, timeout=5)

    assert runner.is_ready()
