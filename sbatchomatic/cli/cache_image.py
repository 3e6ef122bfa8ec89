"""Entry-point for ``sbatchomatic-cli cache-image``."""

from __future__ import annotations

import click

from sbatchomatic.jobs import CacheImageJob
from sbatchomatic.utils.images import parse_image, resolve_image

from ._shared import dry_run_option, finish, make_engine, sbatch_args_option, split_args, tag_option


@click.command("cache-image")
@tag_option
@sbatch_args_option
@dry_run_option
@click.option(
    "--nodes",
    type=click.IntRange(min=1),
    help="Number of nodes that pull the image (default from config: 4).",
)
@click.argument("image")
@click.pass_obj
def cli(
    ctx_obj,
    tag: str | None,
    sbatch_args: str | None,
    dry_run: bool,
    nodes: int | None,
    image: str,
) -> None:
    """Pull IMAGE into the local podman storage of several compute nodes."""
    cfg = ctx_obj["cfg"]
    resolved = resolve_image(parse_image(image, cfg.known_images()), tag, cfg)
    job = CacheImageJob(cfg, resolved, nodes=nodes, sbatch_args=split_args(sbatch_args))
    finish(job.execute(make_engine(dry_run)))


__all__ = ["cli"]
