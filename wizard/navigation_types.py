from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from config import EnrollmentSettings
from state.snapshots import SnapshotStore
from state.touched import TouchedTracker

if TYPE_CHECKING:
    from wizard.navigation.router import WizardNavigator
    from wizard.submission import SubmissionSink


@dataclass(frozen=True)
class WizardContext:
    """Context passed to step renderer callables."""

    store: SnapshotStore
    tracker: TouchedTracker
    navigator: WizardNavigator
    settings: EnrollmentSettings
    sink: SubmissionSink
    today: date
