"""Pre-pull a container image on several compute nodes."""

from __future__ import annotations

from typing import List, Optional

from sbatchomatic.config.schema import ConfigSchema
from sbatchomatic.models import ResolvedImage

from .base import Job, JobSpec


class CacheImageJob(Job):
    """Submit ``podman pull`` through ``sbatch --wrap``.

    Each node writes its own ``srun`` output file; the batch output itself is
    discarded.
    """

    def __init__(
        self,
        settings: ConfigSchema,
        image: ResolvedImage,
        nodes: Optional[int] = None,
        sbatch_args: Optional[List[str]] = None,
    ):
        self.settings = settings
        self.image = image
        self.nodes = nodes or settings.cache_image.nodes
        self.extra_args = list(sbatch_args or [])

    def wrap_command(self) -> str:
        return (
            f"srun --output={self.settings.cache_image.output} podman pull "
            f"--authfile {self.settings.cluster.auth_file} {self.image.reference}"
        )

    def build_spec(self) -> JobSpec:
        args = [
            f"--wrap={self.wrap_command()}",
            f"--nodes={self.nodes}",
            "--output=/dev/null",
            *self.extra_args,
        ]
        return JobSpec(args)
