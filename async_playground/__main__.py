import sys

from async_playground.infrastructure.cli.cli import main


if __name__ == "__main__":
    sys.exit(main())
