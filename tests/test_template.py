from sbatchomatic.jobs.template import render_script
from sbatchomatic.models import CommandSpec, ResolvedImage, VolumeBinding
from sbatchomatic.utils.images import image_args

GPU = ["--security-opt=label=disable", "--device=nvidia.com/gpu=all"]


def test_single_gpu_script_exact(cfg):
    """Freesurfer GPU job with a mounted script renders the documented layout."""
    image = ResolvedImage(
        "docker.io/freesurfer/freesurfer:7.3.2", image_args(cfg.images["freesurfer"])
    )
    command = CommandSpec("/work/run.sh", VolumeBinding("/work/run.sh", "/work/run.sh"))

    script = render_script(
        cluster=cfg.cluster,
        image=image,
        command=command,
        gpu_options=GPU,
        podman_args=["--memory=8g"],
        command_args=["sub-01", "--flag"],
    )

    assert script == (
        "#!/bin/bash\n"
        "set -u\n"
        "export TMPDIR=/ssd/home/$USER/TEMP\n"
        "srun --ntasks=1 podman run --rm"
        " --security-opt=label=disable --device=nvidia.com/gpu=all"
        ' -v "$HOME":"$HOME" -e HPC_HOME="$HOME"'
        " -v /mnt/home/shared/:/mnt/home/shared/"
        " -v /work/run.sh:/work/run.sh"
        " -v /mnt/apps/etc/fs_license.txt:/usr/local/freesurfer/.license:ro"
        " -v /opt/matlab/runtime/R2019b/v97/:/usr/local/freesurfer/MCRv97"
        " -e FS_LICENSE=/usr/local/freesurfer/.license"
        " --authfile /mnt/apps/etc/auth.json"
        " --entrypoint /work/run.sh"
        " --memory=8g"
        " docker.io/freesurfer/freesurfer:7.3.2 sub-01 --flag\n"
    )


def test_array_script_exact(cfg):
    command = CommandSpec("recon-all", task_args=('"A"', '"B"'))

    script = render_script(
        cluster=cfg.cluster,
        image=ResolvedImage("quay.io/lab/tool:1"),
        command=command,
        array=True,
    )

    assert script == (
        "#!/bin/bash\n"
        "set -u\n"
        "export TMPDIR=/ssd/home/$USER/TEMP\n"
        "export REGISTRY_AUTH_FILE=/mnt/apps/etc/auth.json\n"
        "INPUT=(\n"
        '"A"\n'
        '"B"\n'
        ")\n"
        "srun --ntasks=1 podman run --rm"
        ' -v "$HOME":"$HOME" -e HPC_HOME="$HOME"'
        " -v /mnt/home/shared/:/mnt/home/shared/"
        " --authfile /mnt/apps/etc/auth.json"
        " --entrypoint recon-all"
        ' quay.io/lab/tool:1 "${INPUT[$SLURM_ARRAY_TASK_ID]}"\n'
    )


def test_literal_command_has_no_script_mount(cfg):
    script = render_script(
        cluster=cfg.cluster,
        image=ResolvedImage("img"),
        command=CommandSpec("recon-all"),
    )
    srun = script.splitlines()[-1]
    assert srun.count(" -v ") == 2  # home and shared only
    assert "--entrypoint recon-all img" in srun


def test_array_ignores_literal_command_args(cfg):
    script = render_script(
        cluster=cfg.cluster,
        image=ResolvedImage("img"),
        command=CommandSpec("cmd", task_args=('"x"',)),
        command_args=["ignored"],
        array=True,
    )
    assert "ignored" not in script


def test_render_is_deterministic(cfg):
    kwargs = dict(
        cluster=cfg.cluster,
        image=ResolvedImage("img", ("-e", "A=1")),
        command=CommandSpec("cmd", task_args=('"1"', '"2"')),
        array=True,
    )
    assert render_script(**kwargs) == render_script(**kwargs)
