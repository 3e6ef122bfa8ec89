"""
Helpers reused by the job sub-commands (*submit*, *array*, *cache-image*).

Nothing here touches the scheduler directly; the functions only translate
CLI values into the objects the jobs and engines expect.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import click

from sbatchomatic.engines import DryRunEngine, SbatchEngine, SubmissionEngine
from sbatchomatic.utils.errors import NonZeroExit


def split_args(value: Optional[str]) -> List[str]:
    """Split an ``--sbatch-args``/``--podman-args`` value on whitespace.

    No shell quoting is honoured; the values are trusted operator input.
    """
    return value.split() if value else []


def make_engine(dry_run: bool) -> SubmissionEngine:
    """Return the engine matching the ``--dry-run`` flag."""
    return DryRunEngine() if dry_run else SbatchEngine()


def finish(returncode: int) -> None:
    """Convert a non-zero ``sbatch`` status into :class:`NonZeroExit`."""
    if returncode != 0:
        raise NonZeroExit(returncode)


def tag_option(func: Callable) -> Callable:
    return click.option(
        "--tag",
        metavar="TAG",
        help="Image tag – ignored when IMAGE is fully qualified.",
    )(func)


def sbatch_args_option(func: Callable) -> Callable:
    return click.option(
        "--sbatch-args",
        metavar="STR",
        help="Additional args to sbatch (split on whitespace).",
    )(func)


def dry_run_option(func: Callable) -> Callable:
    return click.option(
        "--dry-run",
        is_flag=True,
        help="Print the sbatch command and script instead of submitting.",
    )(func)


def job_options(func: Callable) -> Callable:
    """Attach the options shared by ``submit`` and ``array``."""
    func = dry_run_option(func)
    func = click.option(
        "--podman-args",
        metavar="STR",
        help="Additional args to podman run (split on whitespace).",
    )(func)
    func = sbatch_args_option(func)
    return tag_option(func)


__all__ = [
    "split_args",
    "make_engine",
    "finish",
    "tag_option",
    "sbatch_args_option",
    "dry_run_option",
    "job_options",
]
