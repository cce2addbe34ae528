"""Optional ``.env`` loading for CLI and embedding hosts.

Contents
--------
* :data:`DOTENV_ENV_VAR` - environment toggle enabling ``.env`` loading.
* :func:`should_use_dotenv` - CLI flag over environment toggle precedence.
* :func:`enable_dotenv` - load the nearest ``.env`` without overriding
  variables that are already set.

Loading happens before any :class:`~lib_spec_reporter.runtime.ReporterConfig`
is built, so values from ``.env`` take part in the one-time settings read.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "SPEC_REPORTER_USE_DOTENV"
_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Return whether ``.env`` should be loaded.

    An explicit CLI choice wins; otherwise the environment toggle decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` walking up from the current directory.

    Existing environment variables keep precedence. Returns the resolved path
    that was loaded, or ``None`` when no file was found.
    """
    global _LOADED_PATH
    if _LOADED_PATH is not None:
        return _LOADED_PATH
    found = find_dotenv(usecwd=True)
    if not found:
        logger.debug("no .env file found from %s", Path.cwd())
        return None
    path = Path(found).resolve()
    load_dotenv(path, override=False)
    logger.debug("loaded environment from %s", path)
    _LOADED_PATH = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_PATH
    _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
