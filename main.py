"""Entrypoint for running the converter directly via `python main.py`."""

from __future__ import annotations

from yuan_rates.cli.interface import main

if __name__ == "__main__":
    raise SystemExit(main())
