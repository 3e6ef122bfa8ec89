"""Entry-point for ``sbatchomatic-cli submit``."""

from __future__ import annotations

from typing import Tuple

import click
import structlog

from sbatchomatic.jobs import SingleJob, SingleJobConfig
from sbatchomatic.utils.commands import resolve_command
from sbatchomatic.utils.images import parse_image, resolve_image

from ._shared import finish, job_options, make_engine, split_args

log = structlog.get_logger()


@click.command(
    "submit",
    context_settings=dict(allow_interspersed_args=False),
)
@job_options
@click.option(
    "--gpu/--no-gpu",
    default=True,
    help="Request a GPU and pass it through to the container.",
)
@click.argument("image")
@click.argument("command")
@click.argument("command_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def cli(
    ctx_obj,
    tag: str | None,
    sbatch_args: str | None,
    podman_args: str | None,
    dry_run: bool,
    gpu: bool,
    image: str,
    command: str,
    command_args: Tuple[str, ...],
) -> None:
    """Submit COMMAND running inside IMAGE as a single Slurm job.

    \b
    IMAGE is a short-hand identifier for a known image (e.g. "freesurfer")
    or a fully-qualified name passed directly to podman-run.

    \b
    COMMAND is executed inside the container. If it has a shell script
    extension (.sh) and exists on the host it is mounted into the container.
    Options must precede IMAGE; everything after COMMAND is passed to it.
    """
    cfg = ctx_obj["cfg"]
    resolved = resolve_image(parse_image(image, cfg.known_images()), tag, cfg)
    job = SingleJob(
        cfg,
        SingleJobConfig(
            image=resolved,
            command=resolve_command(command),
            command_args=list(command_args),
            gpu=gpu,
            sbatch_args=split_args(sbatch_args),
            podman_args=split_args(podman_args),
        ),
    )
    log.info("submit.start", image=resolved.reference, command=command)
    finish(job.execute(make_engine(dry_run)))


__all__ = ["cli"]
