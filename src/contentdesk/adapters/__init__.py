"""Adapters connecting the core domain to infrastructure."""
