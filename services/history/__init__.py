"""Saved grammar check history."""
