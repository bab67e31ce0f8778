"""Threaded simulation of the dining philosophers problem, with a command-line entry point."""

__version__ = "1.0.0"
__all__ = ["__version__"]