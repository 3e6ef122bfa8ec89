"""
Module entry-point that makes the package runnable with

    python -m sbatchomatic

The behaviour is identical to the *sbatchomatic-cli* console script because
the Click **group** imported below performs all dispatching.
"""

from sbatchomatic.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
