"""
MiniBasic Command-Line Interface
================================

This package provides the command-line tool for MiniBasic:

- **mbc**: MiniBasic to C translator

The tool is implemented as a Click-based CLI application with
help output and consistent exit codes.
"""

__all__ = ["mbc"]
