"""Batch-script template shared by single and array jobs.

Rendered layout::

    #!/bin/bash
    set -u
    export TMPDIR=<scratch>
    export REGISTRY_AUTH_FILE=<auth>        (array only)
    INPUT=(                                 (array only)
    "<task 0>"
    ...
    )
    srun --ntasks=1 podman run --rm ... <image> <trailing>

The ``srun`` invocation is a single line. Its segments always appear in the
order GPU options, home and shared mounts, script mount, image family
arguments, auth file, entrypoint, user podman arguments, image, trailing
arguments. Nothing in the output depends on time or host state, so equal
inputs give byte-identical scripts.
"""

from __future__ import annotations

from typing import List, Sequence

from sbatchomatic.config.schema import ClusterModel
from sbatchomatic.models import CommandSpec, ResolvedImage

SHEBANG = "#!/bin/bash"
TASK_ARRAY = "INPUT"
TASK_REFERENCE = f'"${{{TASK_ARRAY}[$SLURM_ARRAY_TASK_ID]}}"'


def _preamble(cluster: ClusterModel, task_args: Sequence[str] | None) -> List[str]:
    lines = [SHEBANG, "set -u", f"export TMPDIR={cluster.scratch_dir}"]
    if task_args is not None:
        lines.append(f"export REGISTRY_AUTH_FILE={cluster.auth_file}")
        lines.append(f"{TASK_ARRAY}=(")
        lines.extend(task_args)
        lines.append(")")
    return lines


def _srun_line(
    cluster: ClusterModel,
    image: ResolvedImage,
    command: CommandSpec,
    gpu_options: Sequence[str],
    podman_args: Sequence[str],
    trailing: Sequence[str],
) -> str:
    shared = cluster.shared_dir
    parts: list[str] = ["srun", "--ntasks=1", "podman", "run", "--rm"]
    parts += gpu_options
    parts += ["-v", '"$HOME":"$HOME"', "-e", 'HPC_HOME="$HOME"']
    parts += ["-v", f"{shared}:{shared}"]
    if command.volume is not None:
        parts += ["-v", command.volume.as_arg()]
    parts += image.extra_args
    parts += ["--authfile", cluster.auth_file]
    parts += ["--entrypoint", command.entrypoint]
    parts += podman_args
    parts.append(image.reference)
    parts += trailing
    return " ".join(parts)


def render_script(
    *,
    cluster: ClusterModel,
    image: ResolvedImage,
    command: CommandSpec,
    gpu_options: Sequence[str] = (),
    podman_args: Sequence[str] = (),
    command_args: Sequence[str] = (),
    array: bool = False,
) -> str:
    """Return the complete batch script, terminated by a single newline.

    Args:
        cluster: Fixed cluster paths.
        image: Resolved image reference and family arguments.
        command: Entrypoint, optional script mount and (array) task list.
        gpu_options: Podman options enabling GPU passthrough; empty for CPU jobs.
        podman_args: Already split ``--podman-args`` tokens.
        command_args: Literal trailing arguments (single jobs only).
        array: Render the job-array variant indexing ``INPUT`` with
            ``$SLURM_ARRAY_TASK_ID`` instead of *command_args*.
    """
    task_args = list(command.task_args) if array else None
    trailing = [TASK_REFERENCE] if array else list(command_args)
    lines = _preamble(cluster, task_args)
    lines.append(
        _srun_line(cluster, image, command, gpu_options, podman_args, trailing)
    )
    return "\n".join(lines) + "\n"


__all__ = ["render_script", "TASK_REFERENCE"]
