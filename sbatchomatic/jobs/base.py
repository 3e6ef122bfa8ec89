"""Base classes for batch jobs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from sbatchomatic.engines import SubmissionEngine


@dataclass
class JobSpec:
    """Specification returned by :meth:`Job.build_spec`.

    Attributes mirror the arguments of :meth:`SubmissionEngine.submit`.
    """

    sbatch_args: Sequence[str]
    script: Optional[str] = None


class Job:
    """Base class for anything submitted through ``sbatch``."""

    def execute(self, engine: SubmissionEngine) -> int:
        """Build a :class:`JobSpec` and submit it with *engine*."""
        spec = self.build_spec()
        return engine.submit(spec.sbatch_args, spec.script)

    def build_spec(self) -> JobSpec:
        """Return a :class:`JobSpec` describing how to submit this job."""
        raise NotImplementedError
