"""Engine that prints the submission instead of running it."""

from __future__ import annotations

import shlex
from typing import Optional, Sequence

import click

from .base import SubmissionEngine


class DryRunEngine(SubmissionEngine):
    """Echo the ``sbatch`` command line and script to stdout."""

    def __init__(self, executable: str = "sbatch") -> None:
        self.executable = executable

    def submit(self, args: Sequence[str], script: Optional[str] = None) -> int:
        """Print ``# sbatch ARGS`` followed by *script*; always returns ``0``."""
        click.echo(f"# {shlex.join([self.executable, *args])}")
        if script is not None:
            click.echo(script, nl=False)
        return 0
