"""Command-line interface for pairdb conversion runs.

This package contains the core execution logic, making scripts/ optional.
"""

from pairdb.cli.convert_pairs import run_conversion, main

__all__ = ['run_conversion', 'main']
