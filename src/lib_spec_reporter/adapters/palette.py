"""Rich-powered palette implementing :class:`PalettePort`.

Purpose
-------
Turn Rich style strings into the ANSI escapes embedded in report text, with
named themes and per-role overrides.

Contents
--------
* :data:`PALETTE_THEMES` - built-in role-to-style tables.
* :class:`RichPalette` - palette constructed by the runtime composition.
* :func:`detect_color_support` - terminal capability probe via Rich.

System Role
-----------
Colour support is decided once when the palette is built; the formatter and
its helpers only ever see the resulting value object.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style

from lib_spec_reporter.application.ports.palette import ROLES, PalettePort

logger = logging.getLogger(__name__)

#: Default Rich styles keyed by palette role, per theme.
PALETTE_THEMES: dict[str, dict[str, str]] = {
    "classic": {
        "pass": "green",
        "fail": "red",
        "skip": "bright_black",
        "diagnostic": "blue",
        "info": "blue",
        "muted": "bright_black",
        "emphasis": "bold",
    },
    "bold": {
        "pass": "bold green",
        "fail": "bold red",
        "skip": "dim",
        "diagnostic": "bold blue",
        "info": "bold blue",
        "muted": "bright_black",
        "emphasis": "bold underline",
    },
    "mono": {
        "pass": "",
        "fail": "bold",
        "skip": "dim",
        "diagnostic": "italic",
        "info": "",
        "muted": "dim",
        "emphasis": "bold",
    },
}


class RichPalette(PalettePort):
    """Colour table rendering roles through Rich styles.

    Examples
    --------
    >>> RichPalette(enabled=True).paint("ok", "pass")
    '\\x1b[32mok\\x1b[0m'
    >>> RichPalette(enabled=False).paint("ok", "pass")
    'ok'
    """

    def __init__(
        self,
        *,
        enabled: bool,
        theme: str = "classic",
        styles: Mapping[str, str] | None = None,
        color_system: ColorSystem = ColorSystem.STANDARD,
    ) -> None:
        palette = PALETTE_THEMES.get(theme.strip().lower())
        if palette is None:
            raise ValueError(f"Unknown palette theme: {theme!r}")
        merged = dict(palette)
        for role, spec in (styles or {}).items():
            key = role.strip().lower()
            if key not in ROLES:
                logger.debug("ignoring style for unknown palette role %r", role)
                continue
            merged[key] = spec
        self._enabled = enabled
        self._color_system = color_system
        self._styles = {role: _parse_style(role, spec) for role, spec in merged.items()}

    @classmethod
    def plain(cls) -> "RichPalette":
        """Return a palette that never emits escape codes."""

        return cls(enabled=False)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def paint(self, text: str, role: str) -> str:
        if not self._enabled or not text:
            return text
        style = self._styles.get(role)
        if style is None:
            return text
        return style.render(text, color_system=self._color_system)


def _parse_style(role: str, spec: str) -> Style:
    try:
        return Style.parse(spec) if spec.strip() else Style.null()
    except StyleSyntaxError as exc:
        raise ValueError(f"Invalid style {spec!r} for palette role {role!r}: {exc}") from exc


def detect_color_support(console: Console | None = None) -> bool:
    """Return ``True`` when stderr is a terminal with a usable colour depth."""

    probe = console if console is not None else Console(stderr=True)
    return probe.is_terminal and probe.color_system is not None


__all__ = ["PALETTE_THEMES", "RichPalette", "detect_color_support"]
