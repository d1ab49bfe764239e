"""Install git hooks into the enclosing repository as part of a build."""

__version__ = "0.1.0"
