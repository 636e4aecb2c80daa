"""Enrollment wizard package: steps, gates, navigation and submission."""

from __future__ import annotations

from .navigation_types import WizardContext
from .step_registry import WIZARD_STEPS, StepDefinition, get_step, step_for_address

__all__ = [
    "StepDefinition",
    "WIZARD_STEPS",
    "WizardContext",
    "get_step",
    "step_for_address",
]
