"""Post or update a single status comment on a GitHub pull request."""

__version__ = "0.1.0"
