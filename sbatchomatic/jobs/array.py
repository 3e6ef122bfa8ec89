"""Slurm job array with one task per line of an argument file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from sbatchomatic.config.schema import ConfigSchema
from sbatchomatic.models import CommandSpec, ResolvedImage
from sbatchomatic.utils.errors import EmptyTaskListError

from .base import Job, JobSpec
from .template import render_script

log = structlog.get_logger()


@dataclass
class ArrayJobConfig:
    """Values that shape one job-array submission.

    ``command.task_args`` holds the quoted per-task arguments; task ``i``
    receives element ``i``.
    """

    image: ResolvedImage
    command: CommandSpec
    max_tasks: Optional[int] = None
    gpu: bool = False
    sbatch_args: List[str] = field(default_factory=list)
    podman_args: List[str] = field(default_factory=list)


class ArrayJob(Job):
    """Run the same command once per task argument."""

    def __init__(self, settings: ConfigSchema, cfg: ArrayJobConfig):
        self.settings = settings
        self.cfg = cfg

    @property
    def n_tasks(self) -> int:
        return len(self.cfg.command.task_args)

    def array_arg(self) -> str:
        """Return ``--array=0-<N-1>%<max tasks>``.

        Raises:
            EmptyTaskListError: There are no tasks to submit.
        """
        if self.n_tasks == 0:
            raise EmptyTaskListError("Command argument file contains no task arguments")
        max_tasks = self.cfg.max_tasks or self.settings.array.max_tasks
        return f"--array=0-{self.n_tasks - 1}%{max_tasks}"

    def sbatch_args(self) -> List[str]:
        args = [self.array_arg()]
        if self.cfg.gpu:
            args.append(f"--gres={self.settings.gpu.gres}")
        return args + list(self.cfg.sbatch_args)

    def build_spec(self) -> JobSpec:
        args = self.sbatch_args()
        script = render_script(
            cluster=self.settings.cluster,
            image=self.cfg.image,
            command=self.cfg.command,
            gpu_options=self.settings.gpu.podman_options if self.cfg.gpu else (),
            podman_args=self.cfg.podman_args,
            array=True,
        )
        log.info("array.built", tasks=self.n_tasks, array=args[0])
        return JobSpec(args, script)
