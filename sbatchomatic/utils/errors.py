"""Custom exceptions raised while building and submitting batch jobs.

Every error is a :class:`click.ClickException` so the Click layer converts it
into exit status ``1`` without a traceback. The message is printed on stderr
prefixed with ``ERROR:``.
"""

from __future__ import annotations

from typing import IO, Any

import click


class SbatchomaticError(click.ClickException):
    """Base class for all unrecoverable sbatchomatic failures."""

    exit_code = 1

    def show(self, file: IO[Any] | None = None) -> None:
        """Print ``ERROR: <message>`` to *file* (stderr by default)."""
        click.echo(f"ERROR: {self.format_message()}", file=file, err=True)


class ConfigError(SbatchomaticError):
    """Configuration YAML is missing, unreadable or invalid."""


class FileReadError(SbatchomaticError):
    """An argument or script file could not be read."""


class PathResolutionError(SbatchomaticError):
    """A script path cannot be canonicalised or is not valid UTF-8."""


class MissingImageError(SbatchomaticError):
    """The ``other`` container was chosen without ``--image``."""


class EmptyTaskListError(SbatchomaticError):
    """The argument file contains no usable task lines."""


class SubprocessSpawnError(SbatchomaticError):
    """``sbatch`` could not be launched."""


class SubprocessIOError(SbatchomaticError):
    """The stdin pipe of ``sbatch`` is unavailable or the write failed."""


class SubprocessWaitError(SbatchomaticError):
    """Waiting on the ``sbatch`` child failed at the OS level."""


class NonZeroExit(SbatchomaticError):
    """``sbatch`` ran but exited with a non-zero status."""

    def __init__(self, returncode: int) -> None:
        super().__init__("Something went wrong...")
        self.returncode = returncode
