"""
Entry point for `python -m tarvault` and the `tarvault` console script.
"""

from __future__ import annotations


def main():
    from .cli import run_cli
    run_cli()


if __name__ == "__main__":
    main()
