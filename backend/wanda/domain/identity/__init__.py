"""User identity, roles and trust scores."""
