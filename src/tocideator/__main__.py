"""Entry point for ``python -m tocideator``."""

from tocideator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
