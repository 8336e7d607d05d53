"""
Main entry point for running line_positions as a module.

This allows the package to be run with: python -m line_positions
"""

from .src.cli import main

if __name__ == '__main__':
    main()
