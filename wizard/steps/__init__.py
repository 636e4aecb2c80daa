"""Renderers for the individual enrollment screens."""
