"""Reporter settings resolved from explicit arguments and the environment.

Purpose
-------
Read colour, path and theme configuration once and freeze it into a value
object; nothing downstream consults environment variables again.

Contents
--------
* :class:`ReporterConfig` - frozen settings.
* :func:`resolve_color` - ``NO_COLOR`` / ``FORCE_COLOR`` / terminal precedence.
* Environment parsing helpers mirroring the console-style syntax
  ``role=style,role=style``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from lib_spec_reporter.adapters.palette import PALETTE_THEMES

ENV_FORCE_COLOR = "FORCE_COLOR"
ENV_NO_COLOR = "NO_COLOR"
ENV_BASE_DIR = "SPEC_REPORTER_BASE_DIR"
ENV_THEME = "SPEC_REPORTER_THEME"
ENV_STYLES = "SPEC_REPORTER_STYLES"

_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True, frozen=True)
class ReporterConfig:
    """Immutable configuration for one formatter instance.

    Attributes
    ----------
    force_color:
        Emit ANSI colour even when the output is not a terminal.
    no_color:
        Never emit colour; wins over ``force_color``.
    base_dir:
        Directory file paths are shown relative to.
    theme:
        Name of a built-in palette theme.
    styles:
        Per-role Rich style overrides.
    """

    force_color: bool = False
    no_color: bool = False
    base_dir: Path = field(default_factory=Path.cwd)
    theme: str = "classic"
    styles: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        theme = self.theme.strip().lower()
        if theme not in PALETTE_THEMES:
            known = ", ".join(sorted(PALETTE_THEMES))
            raise ValueError(f"Unknown theme {self.theme!r}; expected one of: {known}")
        object.__setattr__(self, "theme", theme)
        object.__setattr__(self, "base_dir", Path(self.base_dir))
        object.__setattr__(self, "styles", dict(self.styles))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ReporterConfig":
        """Build a config from ``environ`` (defaults to :data:`os.environ`).

        Keyword ``overrides`` that are not ``None`` win over the environment.

        Examples
        --------
        >>> cfg = ReporterConfig.from_env({"NO_COLOR": "1", "SPEC_REPORTER_STYLES": "pass=bold green"})
        >>> cfg.no_color, cfg.styles
        (True, {'pass': 'bold green'})
        """
        env = os.environ if environ is None else environ
        base_dir = env.get(ENV_BASE_DIR)
        config = cls(
            force_color=_force_color(env.get(ENV_FORCE_COLOR)),
            no_color=bool(env.get(ENV_NO_COLOR)),
            base_dir=Path(base_dir) if base_dir else Path.cwd(),
            theme=env.get(ENV_THEME) or "classic",
            styles=parse_styles(env.get(ENV_STYLES)),
        )
        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(config, **explicit) if explicit else config

    def use_color(self, detect: Callable[[], bool]) -> bool:
        """Return whether output should be coloured, probing only when needed."""

        return resolve_color(force_color=self.force_color, no_color=self.no_color, detect=detect)


def resolve_color(*, force_color: bool, no_color: bool, detect: Callable[[], bool]) -> bool:
    """Apply colour precedence: ``no_color``, then ``force_color``, then ``detect()``.

    Examples
    --------
    >>> resolve_color(force_color=True, no_color=True, detect=lambda: True)
    False
    >>> resolve_color(force_color=True, no_color=False, detect=lambda: False)
    True
    >>> resolve_color(force_color=False, no_color=False, detect=lambda: True)
    True
    """
    if no_color:
        return False
    if force_color:
        return True
    return detect()


def parse_styles(raw: str | None) -> dict[str, str]:
    """Convert ``role=style`` comma-separated strings into a dictionary.

    Examples
    --------
    >>> parse_styles('pass=green, fail = bold red')
    {'pass': 'green', 'fail': 'bold red'}
    >>> parse_styles(None)
    {}
    """
    if not raw:
        return {}
    result: dict[str, str] = {}
    for chunk in raw.split(","):
        if "=" not in chunk:
            continue
        key, value = chunk.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if not key or not value:
            continue
        result[key] = value
    return result


def _force_color(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() not in _FALSY


__all__ = [
    "ENV_BASE_DIR",
    "ENV_FORCE_COLOR",
    "ENV_NO_COLOR",
    "ENV_STYLES",
    "ENV_THEME",
    "ReporterConfig",
    "parse_styles",
    "resolve_color",
]
