"""Infrastructure layer — filesystem access, task file resolution, git.

The resolver reads files through the :class:`FileSystem` protocol so the
service layer can swap in an in-memory implementation.
"""
