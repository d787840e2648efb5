"""JSON client for the tax assistant backend (/api/chat and /api/calc)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from models import CalculatorInput, CalculatorResult

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"
CALC_PATH = "/api/calc"

RESULT_NUMBER_FIELDS = ("taxable_income", "tax", "cess", "total_tax")


class BackendError(Exception):
    """The backend could not be reached or answered with an unusable body."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class BackendClient:
    """Single-shot JSON requests against the backend. No retries."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, payload: dict) -> Any:
        logger.debug("POST %s%s", self.base_url, path)
        try:
            response = self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise BackendError(f"Could not reach {path}: {e}") from e

        # Status alone does not fail the call; the body is judged by its fields.
        if response.is_error:
            logger.warning("%s answered with HTTP %s", path, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{path} returned a body that is not JSON") from e

    def chat(self, message: str) -> str:
        """Send one chat message and return the assistant's reply text."""
        data = self._post(CHAT_PATH, {"message": message})
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise BackendError(f"{CHAT_PATH} response has no 'reply' text")
        return reply

    def calculate(self, payload: CalculatorInput) -> CalculatorResult:
        """Request a tax estimate. The parsed body is returned as-is."""
        data = self._post(CALC_PATH, dict(payload))
        if not isinstance(data, dict):
            raise BackendError(f"{CALC_PATH} response is not a JSON object")

        bad = [name for name in RESULT_NUMBER_FIELDS if not _is_number(data.get(name))]
        if not isinstance(data.get("regime"), str):
            bad.append("regime")
        if bad:
            raise BackendError(f"{CALC_PATH} response is missing or has invalid fields: {', '.join(bad)}")
        return data
