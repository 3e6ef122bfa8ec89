"""Submission back-ends for rendered batch scripts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class SubmissionEngine(ABC):
    """Abstract submission engine.

    Concrete implementations hand a job to the scheduler (``sbatch``) or
    merely report what would be submitted. The interface is intentionally
    small so that call sites do not care which one they hold.
    """

    @abstractmethod
    def submit(self, args: Sequence[str], script: Optional[str] = None) -> int:
        """Submit a job.

        Args:
            args: Command line arguments passed to ``sbatch``.
            script: Batch script fed on stdin, or ``None`` when *args* are
                self-contained (e.g. ``--wrap``).

        Returns:
            Process return code.
        """
        raise NotImplementedError
