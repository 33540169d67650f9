import logging
import os
from pathlib import Path
from typing import Optional

from httpdaemon.constants import (
    FNAME_APPLICATION_CONFIG,
    PATH_APP_CONFIG,
    PATH_DAEMON_CONFIG,
    PATH_USER_CONFIG,
)

logger = logging.getLogger(__name__)


def running_under_systemd() -> bool:
    """Guess whether systemd launched us from the variables it sets for its services."""
    return ('INVOCATION_ID' in os.environ) or ('JOURNAL_STREAM' in os.environ)


def resolve_config_file(config: Optional[str] = None, daemon: bool = False) -> Path:
    """
    Pick the application configuration file to load.

    An explicit `config` path always wins, even if it does not exist. Otherwise
    the system-wide file is used in daemon mode (or under systemd) and the
    per-user file elsewhere; when that file is absent the configuration shipped
    with the package is used instead.
    """
    if config:
        return Path(config)

    if daemon or running_under_systemd():
        candidate = PATH_DAEMON_CONFIG / FNAME_APPLICATION_CONFIG
    else:
        candidate = PATH_USER_CONFIG / FNAME_APPLICATION_CONFIG

    if candidate.expanduser().is_file():
        return candidate

    logger.info(f'No configuration at {candidate}; using packaged default')
    return PATH_APP_CONFIG / FNAME_APPLICATION_CONFIG
