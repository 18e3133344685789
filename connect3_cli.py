#!/usr/bin/env python3
"""Entry point for the Connect-3 (5x5) CLI."""

from connect3.cli import main


if __name__ == "__main__":
    main()
