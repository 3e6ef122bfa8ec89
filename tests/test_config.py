"""Tests for the YAML configuration loader."""

from importlib.resources import files

import pytest
import yaml
from click.testing import CliRunner

from sbatchomatic import load_config
from sbatchomatic.cli import main as cli_main
from sbatchomatic.utils.errors import ConfigError


def test_default_yaml_loads(cfg):
    """Loading the built-in default YAML should succeed."""
    with files("sbatchomatic.resources").joinpath("default_config.yaml").open() as fh:
        expected_version = yaml.safe_load(fh)["version"]
    assert cfg.version == expected_version
    assert cfg.known_images() == ["freesurfer"]
    assert cfg.array.max_tasks == 16
    assert cfg.cluster.scratch_dir == "/ssd/home/$USER/TEMP"


def test_explicit_file_merges_over_default(tmp_path, monkeypatch):
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    path = tmp_path / "site.yaml"
    path.write_text(
        "array:\n  max_tasks: 4\n"
        "images:\n  FSL:\n    repository: docker.io/brainlife/fsl\n    default_tag: 6.0\n"
    )

    cfg = load_config(path)

    assert cfg.array.max_tasks == 4
    assert cfg.known_images() == ["freesurfer", "fsl"]
    assert cfg.images["fsl"].default_tag == "6.0"
    assert cfg.gpu.gres == "gpu:a100:1"


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("cluster:\n  shared_dir: /data/shared/\n")
    monkeypatch.setenv("SBATCHOMATIC_CONFIG", str(path))

    assert load_config().cluster.shared_dir == "/data/shared/"


def test_missing_file_raises(tmp_path, monkeypatch):
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_invalid_values_raise(tmp_path, monkeypatch):
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    path = tmp_path / "bad.yaml"
    path.write_text("array:\n  max_tasks: 0\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)


def test_non_mapping_raises(tmp_path, monkeypatch):
    monkeypatch.delenv("SBATCHOMATIC_CONFIG", raising=False)
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_cli_config_changes_script(fake_sbatch, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "site.yaml"
    path.write_text("cluster:\n  scratch_dir: /scratch/$USER\n")

    result = CliRunner().invoke(cli_main, ["--config", str(path), "submit", "img", "cmd"])

    assert result.exit_code == 0, result.output
    assert "export TMPDIR=/scratch/$USER\n" in fake_sbatch.script


def test_cli_missing_config_reports_error(tmp_path):
    result = CliRunner().invoke(cli_main, ["--config", str(tmp_path / "nope.yaml"), "submit", "img", "cmd"])

    assert result.exit_code == 1
    assert "ERROR: Configuration file not found" in result.output
