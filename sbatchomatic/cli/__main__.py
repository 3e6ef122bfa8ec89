"""Module wrapper so running ``python -m sbatchomatic.cli`` matches the console script."""

from sbatchomatic.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
