"""Fork-and-replicate run.

This package is intentionally small: configuration, logging, the GitHub
collaborators and the per-repository runner.
"""
