import pytest
from structlog.testing import capture_logs

from sbatchomatic.models import KnownImage, QualifiedName
from sbatchomatic.utils.errors import MissingImageError
from sbatchomatic.utils.images import parse_image, resolve_image, select_image

FS_ARGS = (
    "-v",
    "/mnt/apps/etc/fs_license.txt:/usr/local/freesurfer/.license:ro",
    "-v",
    "/opt/matlab/runtime/R2019b/v97/:/usr/local/freesurfer/MCRv97",
    "-e",
    "FS_LICENSE=/usr/local/freesurfer/.license",
)


@pytest.mark.parametrize("value", ["freesurfer", "FreeSurfer", "FREESURFER"])
def test_shorthand_is_case_insensitive(cfg, value):
    """Every spelling of a shorthand selects the same family and arguments."""
    selector = parse_image(value, cfg.known_images())
    assert selector == KnownImage("freesurfer")

    resolved = resolve_image(selector, None, cfg)
    assert resolved.reference == "docker.io/freesurfer/freesurfer:7.3.2"
    assert resolved.extra_args == FS_ARGS


def test_known_image_honours_tag(cfg):
    resolved = resolve_image(KnownImage("freesurfer"), "7.4.1", cfg)
    assert resolved.reference == "docker.io/freesurfer/freesurfer:7.4.1"


def test_qualified_name_passes_through(cfg):
    value = "ghcr.io/Lab/Tool:1.0@sha256:abc"
    selector = parse_image(value, cfg.known_images())
    assert selector == QualifiedName(value)

    resolved = resolve_image(selector, None, cfg)
    assert resolved.reference == value
    assert resolved.extra_args == ()


def test_qualified_name_ignores_tag_with_warning(cfg):
    with capture_logs() as logs:
        resolved = resolve_image(QualifiedName("docker.io/library/ubuntu:22.04"), "latest", cfg)

    assert resolved.reference == "docker.io/library/ubuntu:22.04"
    warnings = [e for e in logs if e["log_level"] == "warning"]
    assert warnings and warnings[0]["event"] == 'ignoring tag "latest"'


def test_other_requires_image_option(cfg):
    with pytest.raises(MissingImageError, match="--image must be specified"):
        select_image("Other", None, cfg.known_images())


def test_other_uses_image_option(cfg):
    selector = select_image("other", "quay.io/x/y:2", cfg.known_images())
    assert selector == QualifiedName("quay.io/x/y:2")


def test_image_option_ignored_for_shorthand(cfg):
    with capture_logs() as logs:
        selector = select_image("freesurfer", "quay.io/x/y:2", cfg.known_images())

    assert selector == KnownImage("freesurfer")
    assert any(e["log_level"] == "warning" for e in logs)
