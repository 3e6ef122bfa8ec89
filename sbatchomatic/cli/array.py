"""Entry-point for ``sbatchomatic-cli array``."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
import structlog

from sbatchomatic.jobs import ArrayJob, ArrayJobConfig
from sbatchomatic.utils.commands import read_task_args, resolve_command
from sbatchomatic.utils.images import resolve_image, select_image

from ._shared import finish, job_options, make_engine, split_args

log = structlog.get_logger()


@click.command("array")
@job_options
@click.option(
    "--image",
    "image_opt",
    metavar="STR",
    help='Qualified image, required when IMAGE is "other".',
)
@click.option(
    "--max-tasks",
    type=click.IntRange(min=1),
    help="Maximum concurrently running tasks (default from config: 16).",
)
@click.option(
    "--gpu/--no-gpu",
    default=False,
    help="Request a GPU per task and pass it through to the container.",
)
@click.argument("image")
@click.argument("command")
@click.argument("command_arg_path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def cli(
    ctx_obj,
    tag: str | None,
    sbatch_args: str | None,
    podman_args: str | None,
    dry_run: bool,
    image_opt: str | None,
    max_tasks: int | None,
    gpu: bool,
    image: str,
    command: str,
    command_arg_path: Path,
) -> None:
    """Submit a job array running COMMAND inside IMAGE once per argument line.

    \b
    Every non-blank line of COMMAND_ARG_PATH becomes one task; the trimmed
    line is passed to COMMAND as a single argument.
    """
    cfg = ctx_obj["cfg"]
    selector = select_image(image, image_opt, cfg.known_images())
    resolved = resolve_image(selector, tag, cfg)
    command_spec = replace(
        resolve_command(command),
        task_args=tuple(read_task_args(command_arg_path)),
    )
    job = ArrayJob(
        cfg,
        ArrayJobConfig(
            image=resolved,
            command=command_spec,
            max_tasks=max_tasks,
            gpu=gpu,
            sbatch_args=split_args(sbatch_args),
            podman_args=split_args(podman_args),
        ),
    )
    log.info(
        "array.start",
        image=resolved.reference,
        command=command,
        tasks=len(command_spec.task_args),
    )
    finish(job.execute(make_engine(dry_run)))


__all__ = ["cli"]
