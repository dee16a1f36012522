"""
Package entry point.

Allows running the application via:

    python -m facultyportal

This simply forwards execution to facultyportal.cli.main().
"""

from facultyportal.cli import main

if __name__ == "__main__":
    main()
