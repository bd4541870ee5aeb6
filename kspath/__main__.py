"""Allow running the CLI with ``python -m kspath``."""

from kspath.cli import main

if __name__ == "__main__":
    main()
