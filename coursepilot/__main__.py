"""
Package entry point.

Allows running the application via:

    python -m coursepilot

This simply forwards execution to coursepilot.cli.main().
"""

from coursepilot.cli import main

if __name__ == "__main__":
    main()
