"""Hardcoded plugin defaults and logging setup. Nothing here is persisted."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

PLUGIN_NAME = "AutoDaveSave"
REPO_URL = "https://github.com/netwebdave/AutoDaveSave"
LINKEDIN_URL = "https://www.linkedin.com/in/dsii/"

LOG_LEVEL_ENV = "AUTODAVESAVE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class PluginDefaults:
    enabled: bool = True
    interval_minutes: int = 3
    debug_enabled: bool = False
    debug_refresh_ms: int = 1000


DEFAULTS = PluginDefaults()


def configure_logging(level: str | None = None) -> None:
    name = (level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
