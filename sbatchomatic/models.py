"""
Value objects passed between argument resolution, rendering and submission.

An image selector is one of two variants:

* :class:`KnownImage` – a shorthand listed in the configured image table
  (``freesurfer`` by default);
* :class:`QualifiedName` – anything else, used verbatim as the podman image
  reference.

All objects are immutable and live for a single invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class KnownImage:
    """Image family selected through its lower-case shorthand *name*."""

    name: str


@dataclass(frozen=True)
class QualifiedName:
    """Literal container reference passed straight to ``podman run``."""

    reference: str


ImageSelector = Union[KnownImage, QualifiedName]


@dataclass(frozen=True)
class VolumeBinding:
    """Bind mount of *host* onto *guest*, optionally with a *mode* (``ro``)."""

    host: str
    guest: str
    mode: Optional[str] = None

    def as_arg(self) -> str:
        """Return the ``HOST:GUEST[:MODE]`` value for ``podman run -v``."""
        parts = [self.host, self.guest]
        if self.mode:
            parts.append(self.mode)
        return ":".join(parts)


@dataclass(frozen=True)
class ResolvedImage:
    """Concrete image reference plus the family's extra podman arguments."""

    reference: str
    extra_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CommandSpec:
    """In-container entrypoint and the data needed to run it.

    Attributes:
        entrypoint: Value passed to ``podman run --entrypoint``.
        volume: Bind mount for a host shell script, ``None`` when the
            entrypoint already exists inside the image.
        task_args: Quoted per-task arguments (array jobs only).
    """

    entrypoint: str
    volume: Optional[VolumeBinding] = None
    task_args: Tuple[str, ...] = field(default_factory=tuple)


__all__ = [
    "KnownImage",
    "QualifiedName",
    "ImageSelector",
    "VolumeBinding",
    "ResolvedImage",
    "CommandSpec",
]
