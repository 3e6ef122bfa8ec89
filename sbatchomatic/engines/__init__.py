"""Submission engines."""

from .base import SubmissionEngine
from .dry_run import DryRunEngine
from .sbatch import SbatchEngine

__all__ = ["SubmissionEngine", "DryRunEngine", "SbatchEngine"]
