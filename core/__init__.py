"""Core validation primitives for the enrollment wizard."""
