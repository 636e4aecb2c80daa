"""Plan advisor questionnaire driven by the selection shadow store."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from state.selection import SelectionShadowStore
from wizard.content import ADVISOR_QUESTIONS, AdvisorQuestion

logger = logging.getLogger(__name__)

RESULT_MODE = -1

Answer = str | list[str]


class PlanAdvisor:
    """Step through the advisor questions one at a time.

    ``current_index`` is ``RESULT_MODE`` once the last question is answered.
    """

    def __init__(
        self,
        store: SelectionShadowStore | None = None,
        questions: Sequence[AdvisorQuestion] = ADVISOR_QUESTIONS,
    ) -> None:
        self.store = store or SelectionShadowStore()
        self.displayed: dict[str, frozenset[str]] = {}
        self.store.subscribe(self._on_mirror_refresh)
        self.questions = tuple(questions)
        self.current_index = 0
        self.answers: dict[str, Answer] = {}
        self.active = False

    @property
    def in_result_mode(self) -> bool:
        return self.current_index == RESULT_MODE

    @property
    def current_question(self) -> AdvisorQuestion | None:
        if self.in_result_mode or not 0 <= self.current_index < len(self.questions):
            return None
        return self.questions[self.current_index]

    def start(self) -> None:
        """Open the advisor from the first question with no selections."""

        self.active = True
        self.current_index = 0
        self.answers = {}
        self.store.reset()

    def close(self) -> None:
        self.active = False

    def displayed_selection(self, question_id: str) -> frozenset[str]:
        """Selections as of the last mirror refresh, for drawing the option buttons."""

        return self.displayed.get(question_id, frozenset())

    def _on_mirror_refresh(self, selection: Mapping[str, frozenset[str]]) -> None:
        self.displayed = dict(selection)

    def toggle(self, option_id: str) -> frozenset[str]:
        question = self.current_question
        if question is None:
            return frozenset()
        return self.store.toggle(question.id, option_id, multi=question.multi)

    def is_selected(self, option_id: str) -> bool:
        question = self.current_question
        return question is not None and self.store.is_selected(question.id, option_id)

    def can_advance(self) -> bool:
        question = self.current_question
        return question is not None and bool(self.store.selected(question.id))

    def advance(self) -> bool:
        """Record the current answer and move on; ``False`` when nothing is selected."""

        question = self.current_question
        if question is None or not self.can_advance():
            return False
        labels = [question.label_for(option_id) for option_id in self.store.selection_order(question.id)]
        self.answers[question.id] = labels if question.multi else labels[0]
        next_index = self.current_index + 1
        self.current_index = next_index if next_index < len(self.questions) else RESULT_MODE
        logger.info("advisor:answer %s -> %s", question.id, self.answers[question.id])
        return True


__all__ = ["PlanAdvisor", "RESULT_MODE"]
