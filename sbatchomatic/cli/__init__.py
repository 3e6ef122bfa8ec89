"""Expose the project-wide Click group for the ``sbatchomatic-cli`` script.

The module:

* declares a single Click *group* called :pyfunc:`main`;
* wires common global flags (configuration file, verbosity, log mirror);
* sets up logging via :pyfunc:`sbatchomatic.utils.logging.setup_logging`;
* loads the merged configuration and stores it on the Click context;
* registers every sub-command located in sibling modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import click

from sbatchomatic import __version__
from sbatchomatic.config import load_config
from sbatchomatic.utils.logging import setup_logging


class LazyGroup(click.Group):
    """Click group that imports sub-commands lazily."""

    def __init__(self, *args, **kwargs):
        """Initialise the base class and prepare the lazy registry."""
        self._lazy: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def set_lazy_command(self, name: str, target: str) -> None:
        """Register *name* to be imported from ``target`` on first use."""

        self._lazy[name] = target

    def list_commands(self, ctx):  # noqa: D401 - Click signature
        """Return eager and lazy command names for ``--help``."""
        return sorted({*super().list_commands(ctx), *self._lazy})

    def get_command(self, ctx, cmd_name):  # noqa: D401 - Click signature
        """Resolve *cmd_name* from the eager map or import table."""
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self._lazy.get(cmd_name)
        if not target:
            return None
        module_name, attr = target.split(":", 1)
        import importlib

        module = importlib.import_module(module_name)
        cmd = getattr(module, attr)
        self.add_command(cmd, name=cmd_name)
        return cmd


# ─────────────────────────────────────────────────────────────────────────────
# Context settings shared by the entire Click hierarchy
# ─────────────────────────────────────────────────────────────────────────────
_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
)


@click.group(
    cls=LazyGroup,
    context_settings=_CTX,
    help="""\b
sbatchomatic-cli – submit podman containers to Slurm.

\b
  submit       one job (GPU by default), trailing args passed to COMMAND
  array        job array, one task per line of COMMAND_ARG_PATH
  cache-image  pull an image on compute nodes ahead of time
""",
)
@click.version_option(__version__)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML overriding the packaged defaults (or set $SBATCHOMATIC_CONFIG).",
)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG console + JSON logfile.")
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
@click.pass_context
def main(  # noqa: D401 – Click requires the callback to be named “main”.
    ctx: click.Context,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
    save_logfile: Path | None,
) -> None:
    """Root command executed by *sbatchomatic-cli*.

    Args:
        ctx: Click runtime context that carries objects across sub-commands.
        config_path: Explicit configuration YAML supplied via ``--config``.
        verbose: Emit INFO-level messages on stderr.
        debug: Emit DEBUG-level messages and enable JSON file logging.
        save_logfile: Optional path for a plain-text log that mirrors console
            output.

    Raises:
        sbatchomatic.utils.errors.ConfigError: The configuration is missing
            or invalid.
    """
    # Logging must be configured before any output is produced ----------------
    setup_logging(verbose=verbose, debug=debug, extra_text_log=save_logfile)

    ctx.obj = {
        "cfg": load_config(config_path),
        "verbose": verbose,
        "debug": debug,
    }


main.set_lazy_command("submit", "sbatchomatic.cli.submit:cli")
main.set_lazy_command("array", "sbatchomatic.cli.array:cli")
main.set_lazy_command("cache-image", "sbatchomatic.cli.cache_image:cli")

# The public symbol exported by this module.  Required for ``python -m`` entry-points.
cli = main
__all__: list[str] = ["main"]
