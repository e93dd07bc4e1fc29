"""Command-line flag primitives and a pipeline that generates serialization code from annotated type descriptions."""

__version__ = "0.1.0"