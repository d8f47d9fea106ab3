"""Entrypoints exposing the services."""
