"""Image shorthand parsing and resolution."""

from __future__ import annotations

from typing import Iterable, Optional

import structlog

from sbatchomatic.config.schema import ConfigSchema, ImageModel
from sbatchomatic.models import (
    ImageSelector,
    KnownImage,
    QualifiedName,
    ResolvedImage,
    VolumeBinding,
)
from sbatchomatic.utils.errors import MissingImageError

log = structlog.get_logger()

# Legacy container name that defers the image choice to ``--image``.
OTHER = "other"


def parse_image(value: str, known: Iterable[str]) -> ImageSelector:
    """Return the selector for the IMAGE argument *value*.

    Args:
        value: Shorthand (any case) or fully-qualified image reference.
        known: Lower-case shorthand names from the configuration.

    Returns:
        :class:`KnownImage` when ``value.lower()`` is a known shorthand,
        otherwise :class:`QualifiedName` holding *value* unchanged.
    """
    name = value.lower()
    if name in set(known):
        return KnownImage(name)
    return QualifiedName(value)


def select_image(
    value: str, image_opt: Optional[str], known: Iterable[str]
) -> ImageSelector:
    """Parse IMAGE honouring the legacy ``other`` container.

    ``other`` (any case) requires the real reference in *image_opt*. For every
    other IMAGE value *image_opt* is ignored with a warning.

    Raises:
        MissingImageError: ``other`` was given without *image_opt*.
    """
    if value.lower() == OTHER:
        if not image_opt:
            raise MissingImageError(
                '--image must be specified if "other" container is chosen'
            )
        return QualifiedName(image_opt)
    if image_opt:
        log.warning(f'ignoring --image "{image_opt}"', image=value)
    return parse_image(value, known)


def image_args(image: ImageModel) -> tuple[str, ...]:
    """Return the ``-v``/``-e`` arguments every container of *image* needs."""
    args: list[str] = []
    for vol in image.volumes:
        args += ["-v", VolumeBinding(vol.host, vol.guest, vol.mode).as_arg()]
    for key, value in image.env.items():
        args += ["-e", f"{key}={value}"]
    return tuple(args)


def resolve_image(
    selector: ImageSelector, tag: Optional[str], cfg: ConfigSchema
) -> ResolvedImage:
    """Turn *selector* into the reference and arguments used by podman.

    Args:
        selector: Result of :func:`parse_image` / :func:`select_image`.
        tag: Optional ``--tag`` override.
        cfg: Validated configuration holding the image table.

    Returns:
        :class:`ResolvedImage`. Known images get ``repository:tag`` (falling
        back to the configured default tag) and their extra arguments;
        qualified names are returned verbatim with no extra arguments.
    """
    if isinstance(selector, KnownImage):
        image = cfg.images[selector.name]
        reference = f"{image.repository}:{tag or image.default_tag}"
        log.debug("image.resolved", shorthand=selector.name, reference=reference)
        return ResolvedImage(reference, image_args(image))

    if tag:
        log.warning(f'ignoring tag "{tag}"', image=selector.reference)
    return ResolvedImage(selector.reference)


__all__ = ["OTHER", "parse_image", "select_image", "image_args", "resolve_image"]
