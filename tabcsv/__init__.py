"""Read, edit and write CSV documents with labelled rows and columns."""

__version__ = "1.0.0"
__all__ = ["params", "converter", "reader", "writer", "table", "document"]