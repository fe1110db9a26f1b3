"""Infix expression calculator based on Reverse Polish Notation, with variables and a command line."""

__version__ = "1.0.0"
__all__ = ["cli", "notation", "variables"]