from click.testing import CliRunner

from sbatchomatic.cli import main as cli_main


def test_cli_cache_image_submits_wrap(fake_sbatch):
    """Verify cache-image submits a --wrap job without a stdin script."""
    result = CliRunner().invoke(cli_main, ["cache-image", "freesurfer"])

    assert result.exit_code == 0, result.output
    assert fake_sbatch.last["cmd"] == [
        "sbatch",
        "--wrap=srun --output=cache-image-%N-%j.out podman pull "
        "--authfile /mnt/apps/etc/auth.json docker.io/freesurfer/freesurfer:7.3.2",
        "--nodes=4",
        "--output=/dev/null",
    ]
    assert fake_sbatch.last["stdin"] is None


def test_cli_cache_image_qualified_and_nodes(fake_sbatch):
    result = CliRunner().invoke(cli_main, ["cache-image", "--nodes", "8", "quay.io/lab/tool:1"])

    assert result.exit_code == 0, result.output
    cmd = fake_sbatch.last["cmd"]
    assert cmd[1].endswith(" quay.io/lab/tool:1")
    assert cmd[2] == "--nodes=8"


def test_cli_cache_image_dry_run(fake_sbatch):
    result = CliRunner().invoke(cli_main, ["cache-image", "--dry-run", "--tag", "8.0.0", "freesurfer"])

    assert result.exit_code == 0, result.output
    assert not fake_sbatch.calls
    assert "docker.io/freesurfer/freesurfer:8.0.0" in result.output
