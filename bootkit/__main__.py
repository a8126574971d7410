"""
Entry point for running BootKit as a module.

Usage: python -m bootkit [options]
"""

from bootkit.cli.parser import main

if __name__ == "__main__":
    main()
