"""Entry point for ``python -m pyhusky``."""

import sys

from pyhusky.cli import run


def main() -> None:
    """Install hooks and exit with the resulting status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
