"""Utilities to ensure Alembic always finds the migration scripts."""

from __future__ import annotations

from pathlib import Path
from typing import Any

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_MIGRATIONS_PATH = _PROJECT_ROOT / "migrations"


def _ensure_script_location(config: Any) -> None:
    """Point a bare Alembic config at this project's migrations directory."""
    if config.get_main_option("script_location"):
        return
    if not _MIGRATIONS_PATH.exists():
        return
    config.set_main_option("script_location", str(_MIGRATIONS_PATH))
    if not config.get_main_option("prepend_sys_path"):
        config.set_main_option("prepend_sys_path", str(_PROJECT_ROOT))


def alembic_config(database_url: str | None = None):
    """Build an Alembic ``Config`` for programmatic upgrades (tests, deploy scripts)."""
    from alembic.config import Config

    config = Config()
    _ensure_script_location(config)
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url)
    return config


__all__ = ["alembic_config"]
