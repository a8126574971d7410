"""
Entry point for running BootKit CLI as a module.

Usage: python -m bootkit.cli [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
