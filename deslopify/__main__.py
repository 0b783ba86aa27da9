"""Module entrypoint for running Deslopify as ``python -m deslopify``."""

from __future__ import annotations

from deslopify.cli import main


if __name__ == "__main__":
    main()
