"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from collections.abc import Callable

name = "lib_spec_reporter"
title = "Clean, colourised spec-style formatter for streamed test-runner events"
version = "0.5.0"
homepage = "https://github.com/bitranox/lib_spec_reporter"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_spec_reporter"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (``print`` by default)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    text = f"Info for {name}:\n\n" + "".join(f"    {label:<{pad}} = {value}\n" for label, value in fields)
    if writer is None:
        print(text, end="")
    else:
        writer(text)
