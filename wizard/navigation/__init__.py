"""Navigation helpers for the Streamlit wizard."""

from __future__ import annotations

from wizard.navigation.router import PAGE_QUERY_PARAM, ForwardOutcome, StepPhase, WizardNavigator

__all__ = ["ForwardOutcome", "PAGE_QUERY_PARAM", "StepPhase", "WizardNavigator"]
