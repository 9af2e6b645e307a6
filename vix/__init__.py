"""A small modal terminal text editor: buffer, editor state, file logging and terminal front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]