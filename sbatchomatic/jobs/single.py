"""Single containerised job, GPU-enabled by default."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from sbatchomatic.config.schema import ConfigSchema
from sbatchomatic.models import CommandSpec, ResolvedImage

from .base import Job, JobSpec
from .template import render_script


@dataclass
class SingleJobConfig:
    """Values that shape one single-job submission."""

    image: ResolvedImage
    command: CommandSpec
    command_args: List[str] = field(default_factory=list)
    gpu: bool = True
    sbatch_args: List[str] = field(default_factory=list)
    podman_args: List[str] = field(default_factory=list)


class SingleJob(Job):
    """Run one command in one container."""

    def __init__(self, settings: ConfigSchema, cfg: SingleJobConfig):
        self.settings = settings
        self.cfg = cfg

    def sbatch_args(self) -> List[str]:
        """Return ``--gres`` (GPU jobs) followed by the user's extra args."""
        args = [f"--gres={self.settings.gpu.gres}"] if self.cfg.gpu else []
        return args + list(self.cfg.sbatch_args)

    def build_spec(self) -> JobSpec:
        script = render_script(
            cluster=self.settings.cluster,
            image=self.cfg.image,
            command=self.cfg.command,
            gpu_options=self.settings.gpu.podman_options if self.cfg.gpu else (),
            podman_args=self.cfg.podman_args,
            command_args=self.cfg.command_args,
        )
        return JobSpec(self.sbatch_args(), script)
