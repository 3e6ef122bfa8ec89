"""Resolve the in-container command and the per-task argument file."""

from __future__ import annotations

from pathlib import Path
from typing import List

import structlog

from sbatchomatic.models import CommandSpec, VolumeBinding
from sbatchomatic.utils.errors import FileReadError, PathResolutionError

log = structlog.get_logger()

SCRIPT_SUFFIXES = frozenset({".sh"})


def resolve_command(command: str) -> CommandSpec:
    """Return the entrypoint for *command*.

    When *command* names an existing local shell script it is canonicalised
    and bind-mounted at the same absolute path inside the container, which
    then becomes the entrypoint. Anything else is assumed to exist inside
    the image and is used verbatim.

    Raises:
        PathResolutionError: The script cannot be canonicalised or its
            absolute path is not valid UTF-8.
    """
    path = Path(command)
    # Printable form; undecodable bytes become U+FFFD.
    shown = command.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    if not (path.suffix in SCRIPT_SUFFIXES and path.is_file()):
        return CommandSpec(entrypoint=command)

    try:
        resolved = str(path.resolve(strict=True))
    except (OSError, RuntimeError) as exc:
        raise PathResolutionError(
            f'It looks like "{shown}" is a shell script, but a canonical path '
            f"cannot be determined for mounting in each container: {exc}"
        ) from exc
    try:
        resolved.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathResolutionError(f'"{shown}" is not valid UTF-8') from exc

    log.info("command.script_mounted", path=resolved)
    return CommandSpec(entrypoint=resolved, volume=VolumeBinding(resolved, resolved))


def read_task_args(path: Path) -> List[str]:
    """Return one double-quoted argument per non-blank line of *path*.

    Lines are trimmed before the blank check, so ``"A\\n  B  \\n\\nC\\n"``
    yields ``['"A"', '"B"', '"C"']``. The content is not escaped.

    Raises:
        FileReadError: *path* cannot be read as UTF-8 text.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(
            f"Unable to read command argument file, {str(path)!r}: {exc}"
        ) from exc

    args = [f'"{line.strip()}"' for line in text.split("\n") if line.strip()]
    log.debug("command.task_args", path=str(path), count=len(args))
    return args


__all__ = ["SCRIPT_SUFFIXES", "resolve_command", "read_task_args"]
