"""CLI interface for gcc-makedepend.

This package provides the command-line entry point that updates the
dependency section of a makefile from the output of ``gcc -MM``.
"""
