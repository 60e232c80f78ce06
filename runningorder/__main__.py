"""
Package entry point.

Allows running the application via:

    python -m runningorder

This simply forwards execution to runningorder.cli.main().
"""

from runningorder.cli import main

if __name__ == "__main__":
    main()
