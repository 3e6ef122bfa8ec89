"""
Pydantic models that mirror the YAML configuration consumed by *sbatchomatic*.

The classes define a strongly-typed view of the configuration so the rest of
the codebase works with validated objects instead of ad-hoc dictionaries.

Notes:
* Image table keys are the shorthand names accepted on the command line.
  They are normalised to lower case because shorthand matching is
  case-insensitive.
* Paths are kept as plain strings. They describe locations on the cluster,
  not on the submitting host, and may contain shell variables such as
  ``$USER`` that are expanded by the job shell.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

# --------------------------------------------------------------------------- #
# 1.  Leaf models                                                             #
# --------------------------------------------------------------------------- #


class VolumeModel(BaseModel):
    """One ``-v HOST:GUEST[:MODE]`` bind mount."""

    host: str
    guest: str
    mode: Optional[str] = None


class ImageModel(BaseModel):
    """Known image family reachable through a shorthand name.

    Attributes:
        repository: Fully-qualified repository without the tag.
        default_tag: Tag used when ``--tag`` is not supplied.
        volumes: Extra bind mounts every container of this family needs.
        env: Extra environment variables, rendered in mapping order.
    """

    repository: str
    default_tag: str
    volumes: List[VolumeModel] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)

    @field_validator("default_tag", mode="before")
    @classmethod
    def _tag_as_text(cls, value):
        """Accept tags YAML parsed as numbers (``7.4`` → ``"7.4"``)."""
        return value if isinstance(value, str) else str(value)


class ClusterModel(BaseModel):
    """Fixed cluster paths embedded into every generated script."""

    scratch_dir: str = "/ssd/home/$USER/TEMP"
    shared_dir: str = "/mnt/home/shared/"
    auth_file: str = "/mnt/apps/etc/auth.json"


class GpuModel(BaseModel):
    """Resources requested and podman options applied for GPU jobs."""

    gres: str = "gpu:a100:1"
    podman_options: List[str] = Field(
        default_factory=lambda: [
            "--security-opt=label=disable",
            "--device=nvidia.com/gpu=all",
        ]
    )


class ArrayModel(BaseModel):
    """Job-array defaults."""

    max_tasks: int = Field(16, ge=1, description="Concurrent task cap (%N)")


class CacheImageModel(BaseModel):
    """Settings for the ``cache-image`` sub-command."""

    nodes: int = Field(4, ge=1)
    output: str = "cache-image-%N-%j.out"


# --------------------------------------------------------------------------- #
# 2.  Root model                                                              #
# --------------------------------------------------------------------------- #


class ConfigSchema(BaseModel):
    """Validated top-level configuration."""

    version: int = 1
    cluster: ClusterModel = Field(default_factory=ClusterModel)
    gpu: GpuModel = Field(default_factory=GpuModel)
    array: ArrayModel = Field(default_factory=ArrayModel)
    cache_image: CacheImageModel = Field(default_factory=CacheImageModel)
    images: Dict[str, ImageModel] = Field(default_factory=dict)

    @field_validator("images", mode="before")
    @classmethod
    def _lowercase_shorthands(cls, value):
        """Normalise shorthand keys and reject case-only duplicates."""
        if not isinstance(value, dict):
            return value
        out: dict = {}
        for key, item in value.items():
            name = str(key).lower()
            if name in out:
                raise ValueError(f"Duplicate image shorthand: {key!r}")
            out[name] = item
        return out

    # --------------------------- convenience ----------------------------- #
    def known_images(self) -> List[str]:
        """Return the accepted shorthand names in sorted order."""
        return sorted(self.images)
