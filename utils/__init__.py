"""Utility helpers for the enrollment wizard."""

from __future__ import annotations

from .errors import display_error as display_error
