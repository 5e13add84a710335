"""Domain layer — value parsing, frontmatter codec, error types.

This layer depends only on stdlib, ruamel.yaml, and python-dateutil.
It must never import from services, infrastructure, commands, or config.
"""
