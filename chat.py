"""Chat panel: transcript state, sending messages and drawing the bubbles."""

from __future__ import annotations

import logging
from typing import MutableMapping

import streamlit as st

from api_client import BackendClient, BackendError
from models import CalculatorResult, Message
from utils import format_inr

logger = logging.getLogger(__name__)

INPUT_KEY = "chat_input"
INPUT_PLACEHOLDER = "Ask anything, e.g. What are the new regime slab rates?"

WELCOME_MESSAGE = (
    "Welcome! I can answer questions on Indian income tax and compute quick estimates. "
    "Ask anything or use the calculator in the sidebar."
)
FALLBACK_REPLY = "Sorry, I could not reach the server. Please check your connection and try again."


def init_chat_state(state: MutableMapping) -> None:
    if "messages" not in state:
        state["messages"] = [Message(role="assistant", content=WELCOME_MESSAGE)]
    if "sending" not in state:
        state["sending"] = False


def submit_message(state: MutableMapping, text: str) -> bool:
    """Append the user's message and mark it as waiting for a reply.

    Blank input does nothing and returns False.
    """
    if not text or not text.strip():
        return False

    state["messages"].append(Message(role="user", content=text))
    state["pending_message"] = text
    state["sending"] = True
    return True


def deliver_pending(state: MutableMapping, backend: BackendClient) -> bool:
    """Ask the backend about the waiting message and append its reply.

    A failed call is answered with FALLBACK_REPLY instead of raising.
    ``sending`` is cleared whatever happens.
    """
    text = state.pop("pending_message", None)
    if text is None:
        state["sending"] = False
        return False

    try:
        reply = backend.chat(text)
    except BackendError:
        logger.exception("Chat request failed")
        reply = FALLBACK_REPLY
    finally:
        state["sending"] = False

    state["messages"].append(Message(role="assistant", content=reply))
    return True


def send_message(state: MutableMapping, text: str, backend: BackendClient) -> bool:
    """Submit and deliver in one go."""
    if not submit_message(state, text):
        return False
    deliver_pending(state, backend)
    return True


def append_estimate_summary(state: MutableMapping, result: CalculatorResult) -> None:
    """Post a one-line summary of a finished estimate into the transcript."""
    content = (
        f"Your quick estimate under the {result['regime'].upper()} regime is "
        f"Total Tax ₹{format_inr(result['total_tax'])}."
    )
    state["messages"].append(Message(role="assistant", content=content))


def render_chat(state: MutableMapping, height: int) -> None:
    # Newest message last.
    with st.container(height=height):
        for message in state["messages"]:
            with st.chat_message(message["role"]):
                st.markdown(message["content"])
