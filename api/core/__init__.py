"""
Building blocks shared by the feature packages: environment settings, the
asyncpg-backed `Database`, the error taxonomy with its HTTP handlers, and
logging setup.

Post-specific SQL and rules belong in `posts/`, not here.
"""
