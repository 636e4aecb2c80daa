"""Per-visitor logging context for the enrollment wizard.

Every record emitted while a script run is active carries the browser client,
the Streamlit session and the wizard step on screen, so one applicant's path
through the steps can be followed in a shared log. Customer input is never
part of the context.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

LOG_FORMAT = "%(asctime)s %(levelname)s [client=%(client_id)s session=%(session_id)s step=%(wizard_step)s] %(name)s: %(message)s"

UNSET = "-"
CLIENT_ID_DISPLAY_LENGTH = 8

_CONTEXT: dict[str, contextvars.ContextVar[str]] = {
    name: contextvars.ContextVar(name, default=UNSET) for name in ("client_id", "session_id", "wizard_step")
}
_BASE_RECORD_FACTORY = logging.getLogRecordFactory()
_factory_installed = False


def _clean(value: str | None) -> str:
    if value is None:
        return UNSET
    return value.strip() or UNSET


def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
    record = _BASE_RECORD_FACTORY(*args, **kwargs)
    for name, var in _CONTEXT.items():
        setattr(record, name, var.get())
    return record


def configure_logging(*, level: int = logging.INFO) -> None:
    """Install the wizard format on the root handlers and tag every record."""

    global _factory_installed
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
        for handler in root.handlers:
            if handler.formatter is None:
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if not _factory_installed:
        logging.setLogRecordFactory(_record_factory)
        _factory_installed = True


def set_client_id(client_id: str | None) -> None:
    """Bind the browser client; only a short prefix of the id is logged."""

    _CONTEXT["client_id"].set(_clean(client_id)[:CLIENT_ID_DISPLAY_LENGTH])


def set_session_id(session_id: str | None) -> None:
    _CONTEXT["session_id"].set(_clean(session_id))


@contextmanager
def log_context(**fields: str | None) -> Iterator[None]:
    """Override context fields (``client_id``, ``session_id``, ``wizard_step``) for a block.

    ``None`` leaves a field untouched.
    """

    unknown = set(fields) - set(_CONTEXT)
    if unknown:
        raise TypeError(f"Unknown logging context field(s): {', '.join(sorted(unknown))}")
    tokens = [(_CONTEXT[name], _CONTEXT[name].set(_clean(value))) for name, value in fields.items() if value is not None]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = ["LOG_FORMAT", "configure_logging", "log_context", "set_client_id", "set_session_id"]
