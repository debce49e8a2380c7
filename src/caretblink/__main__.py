"""Entry point for the caretblink terminal demo."""

import sys

from caretblink.cli import run


def main() -> None:
    """Run the demo and exit with its status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
