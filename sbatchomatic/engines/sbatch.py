"""Slurm ``sbatch`` submission engine."""

from __future__ import annotations

import subprocess
from typing import Optional, Sequence

import structlog

from sbatchomatic.utils.errors import (
    SubprocessIOError,
    SubprocessSpawnError,
    SubprocessWaitError,
)

from .base import SubmissionEngine

log = structlog.get_logger()


def _abort(proc: subprocess.Popen) -> None:
    """Kill and reap a child whose script could not be delivered."""
    proc.kill()
    proc.wait()


class SbatchEngine(SubmissionEngine):
    """Pipe batch scripts into ``sbatch`` and wait for it to finish."""

    def __init__(self, executable: str = "sbatch") -> None:
        """Configure the engine.

        Args:
            executable: Name or path of the ``sbatch`` binary.
        """
        self.executable = executable

    def submit(self, args: Sequence[str], script: Optional[str] = None) -> int:
        """Spawn ``sbatch``, write *script* to its stdin, then wait.

        The stdin pipe is closed before waiting so ``sbatch`` sees EOF. The
        wait is unconditional; there is no timeout.

        Args:
            args: Arguments appended after the executable.
            script: Batch script text, ``None`` to leave stdin untouched.

        Returns:
            The return code of ``sbatch``.

        Raises:
            SubprocessSpawnError: ``sbatch`` could not be launched.
            SubprocessIOError: Its stdin is unavailable or the write failed.
            SubprocessWaitError: Waiting on the child failed.
        """
        cmd: list[str] = [self.executable, *args]
        log.info("sbatch.submit", cmd=cmd)
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE if script is not None else None,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except (OSError, ValueError) as exc:
            raise SubprocessSpawnError(f"Unable to invoke {self.executable}: {exc}") from exc

        if script is not None:
            if proc.stdin is None:
                _abort(proc)
                raise SubprocessIOError(f"Unable to take stdin of {self.executable}")
            try:
                proc.stdin.write(script)
                proc.stdin.close()
            except (OSError, UnicodeError) as exc:
                _abort(proc)
                raise SubprocessIOError(
                    f"Unable to write job script to {self.executable}: {exc}"
                ) from exc

        try:
            returncode = proc.wait()
        except OSError as exc:
            raise SubprocessWaitError(f"Unable to wait for {self.executable}: {exc}") from exc

        if returncode != 0:
            log.error("sbatch.failed", returncode=returncode)
        else:
            log.info("sbatch.done")
        return returncode
