"""Compile MDXLD documents into worker metadata and content."""

__version__ = "0.1.0"
