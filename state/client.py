"""Browser client identity used to scope persistent storage.

Streamlit gives a server no per-browser storage, so each browser carries a
random client id in the ``client`` query parameter. The id survives reloads of
the same URL and keeps one visitor's snapshots away from everyone else's.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Callable, MutableMapping, cast

import streamlit as st

from constants.keys import StateKeys

logger = logging.getLogger(__name__)

CLIENT_QUERY_PARAM = "client"

_CLIENT_ID = re.compile(r"^[0-9a-f]{32}$")


def _new_client_id() -> str:
    return uuid.uuid4().hex


def is_client_id(value: object) -> bool:
    return isinstance(value, str) and bool(_CLIENT_ID.match(value))


def resolve_client_id(
    query_params: MutableMapping[str, object] | None = None,
    session_state: MutableMapping[str, object] | None = None,
    *,
    factory: Callable[[], str] = _new_client_id,
) -> str:
    """Return this browser's client id, creating and publishing one if needed.

    The query parameter wins; a session that lost it (a typed URL without the
    parameter) keeps its id and writes it back.
    """

    params = query_params if query_params is not None else cast(MutableMapping[str, object], st.query_params)
    state = session_state if session_state is not None else cast(MutableMapping[str, object], st.session_state)
    candidate = params.get(CLIENT_QUERY_PARAM)
    if isinstance(candidate, list):
        candidate = candidate[0] if candidate else None
    if not is_client_id(candidate):
        candidate = state.get(StateKeys.CLIENT_ID)
    if not is_client_id(candidate):
        candidate = factory()
        logger.info("client:new %s", candidate)
    client_id = cast(str, candidate)
    state[StateKeys.CLIENT_ID] = client_id
    if params.get(CLIENT_QUERY_PARAM) != client_id:
        params[CLIENT_QUERY_PARAM] = client_id
    return client_id


__all__ = ["CLIENT_QUERY_PARAM", "is_client_id", "resolve_client_id"]
