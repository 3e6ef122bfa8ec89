"""
sbatchomatic package initialisation.

The module performs two small tasks:

1. **Expose the version string**
   ``sbatchomatic.__version__`` is resolved at import-time from the installed
   distribution metadata so the CLI ``--version`` flag and the logs agree.

2. **Re-export the public YAML loader**
   :func:`sbatchomatic.config.load_config` is re-exported at the top level so
   call-sites can simply do::

       from sbatchomatic import load_config
"""

from importlib.metadata import PackageNotFoundError, version

# --------------------------------------------------------------------------- #
# Version resolution
# --------------------------------------------------------------------------- #
try:
    __version__: str = version("sbatchomatic")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

# --------------------------------------------------------------------------- #
# Public re-exports
# --------------------------------------------------------------------------- #
from .config import load_config  # noqa: E402 – deliberate late import

__all__: list[str] = ["load_config", "__version__"]
