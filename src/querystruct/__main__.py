"""
Main entry point for the querystruct CLI.

This module is executed when running `python -m querystruct` or via the `querystruct` executable.
"""

from .cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
