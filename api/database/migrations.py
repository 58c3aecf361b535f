import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


class MigrationRunner:
    """
    Applies alembic migrations in the background and reports readiness.

    /ready answers 503 until `alembic upgrade head` has finished. A failed
    upgrade is logged and the service stays not ready.
    """

    def __init__(self, enabled: bool = True, config_path: Path = ALEMBIC_INI):
        self.enabled = enabled
        self.config_path = config_path
        self._ready = not enabled
        self._task: asyncio.Task | None = None

    def is_ready(self) -> bool:
        return self._ready

    def start(self) -> None:
        if not self.enabled:
            logging.info("Schema migrations disabled, assuming schema is up to date")
            return
        self._task = asyncio.create_task(self.run())

    async def run(self) -> None:
        logging.info("Applying schema migrations...")
        try:
            await asyncio.to_thread(self._upgrade)
        except Exception as e:
            logging.error(f"Schema migration failed: {e}", exc_info=True)
            return
        self._ready = True
        logging.info("Schema migrations applied")

    def _upgrade(self) -> None:
        cfg = Config(str(self.config_path))
        # логирование уже настроено приложением, env.py не должен его перетирать
        cfg.attributes["configure_logger"] = False
        command.upgrade(cfg, "head")
