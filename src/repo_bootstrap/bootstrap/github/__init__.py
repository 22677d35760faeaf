"""GitHub collaborators: REST client, gh CLI auth, fork and issue services."""
