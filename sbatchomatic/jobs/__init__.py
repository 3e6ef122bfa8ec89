"""Batch jobs that render scripts and hand them to an engine."""

from .base import Job, JobSpec
from .array import ArrayJob, ArrayJobConfig
from .cache import CacheImageJob
from .single import SingleJob, SingleJobConfig
from .template import render_script

__all__ = [
    "Job",
    "JobSpec",
    "ArrayJob",
    "ArrayJobConfig",
    "CacheImageJob",
    "SingleJob",
    "SingleJobConfig",
    "render_script",
]
