"""locus — frontmatter task file manager."""

__version__ = "0.1.0"
