"""Quick tax estimate panel.

The form holds raw text; it is only turned into a CalculatorInput when the
Calculate action fires. All tax figures come from the backend and are shown
as returned.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Callable, MutableMapping, Optional

import streamlit as st

from api_client import BackendClient, BackendError
from models import REGIMES, CalculatorInput, CalculatorResult, Number
from utils import format_inr

logger = logging.getLogger(__name__)

INCOME_KEY = "calc_income"
REGIME_KEY = "calc_regime"
D80C_KEY = "calc_80c"
D80D_KEY = "calc_80d"
OTHER_KEY = "calc_other"
BUTTON_KEY = "calc_button"

FIELD_KEYS = (INCOME_KEY, REGIME_KEY, D80C_KEY, D80D_KEY, OTHER_KEY)

DEFAULTS = {
    INCOME_KEY: "1200000",
    REGIME_KEY: "new",
    D80C_KEY: "150000",
    D80D_KEY: "0",
    OTHER_KEY: "0",
}

ALERT_TEXT = "Failed to calculate. Please try again."

# ASCII digits only, no underscores, no hex or words.
AMOUNT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def init_calculator_state(state: MutableMapping) -> None:
    for key, value in DEFAULTS.items():
        if key not in state:
            state[key] = value
    if "calc_loading" not in state:
        state["calc_loading"] = False
    if "calc_result" not in state:
        state["calc_result"] = None


def parse_amount(raw) -> Optional[Number]:
    """'1200000' -> 1200000, '1.5e5' -> 150000.0, anything unparseable -> None."""
    text = str(raw).strip() if raw is not None else ""
    if not AMOUNT_RE.fullmatch(text):
        return None
    if INTEGER_RE.fullmatch(text):
        return int(text)
    value = float(text)
    return value if math.isfinite(value) else None


def can_calculate(income, regime) -> bool:
    amount = parse_amount(income)
    return amount is not None and amount >= 0 and regime in REGIMES


def build_input(income, regime, d80c, d80d, other) -> Optional[CalculatorInput]:
    """Return the request body, or None when the form cannot be submitted."""
    if not can_calculate(income, regime):
        return None

    deductions = []
    for raw in (d80c, d80d, other):
        if raw is None or not str(raw).strip():
            deductions.append(0)
            continue
        amount = parse_amount(raw)
        if amount is None:
            return None
        deductions.append(amount)

    return CalculatorInput(
        annual_income=parse_amount(income),
        regime=regime,
        deductions_80c=deductions[0],
        deductions_80d=deductions[1],
        other_deductions=deductions[2],
    )


def current_input(state: MutableMapping) -> Optional[CalculatorInput]:
    return build_input(*(state.get(key) for key in FIELD_KEYS))


def request_calculation(state: MutableMapping) -> bool:
    """Queue the current form values for an estimate.

    Does nothing and returns False when the form cannot be submitted.
    """
    payload = current_input(state)
    if payload is None:
        return False

    state.pop("calc_error", None)
    state["calc_pending"] = payload
    state["calc_loading"] = True
    return True


def complete_calculation(
    state: MutableMapping,
    backend: BackendClient,
    on_calculated: Optional[Callable[[CalculatorResult], None]] = None,
) -> Optional[CalculatorResult]:
    """Send the queued request.

    On success the result is stored in ``state["calc_result"]`` and handed to
    ``on_calculated``. On failure an alert is recorded in ``state["calc_error"]``
    and the previous result stays as it was. ``calc_loading`` is cleared
    whatever happens.
    """
    payload = state.pop("calc_pending", None)
    if payload is None:
        state["calc_loading"] = False
        return None

    try:
        result = backend.calculate(payload)
        state["calc_result"] = result
        if on_calculated is not None:
            on_calculated(result)
    except BackendError:
        logger.exception("Tax estimate request failed")
        state["calc_error"] = ALERT_TEXT
        return None
    finally:
        state["calc_loading"] = False
    return result


def run_calculation(
    state: MutableMapping,
    backend: BackendClient,
    on_calculated: Optional[Callable[[CalculatorResult], None]] = None,
) -> Optional[CalculatorResult]:
    """Request and complete an estimate for the current form values."""
    if not request_calculation(state):
        return None
    return complete_calculation(state, backend, on_calculated)


def render_result(result: CalculatorResult) -> None:
    st.markdown(f"Taxable Income: ₹{format_inr(result['taxable_income'])}")
    st.markdown(f"Tax: ₹{format_inr(result['tax'])}")
    st.markdown(f"Cess (4%): ₹{format_inr(result['cess'])}")
    st.markdown(f"**Total Tax: ₹{format_inr(result['total_tax'])}**")


def render_calculator(state: MutableMapping, on_calculate: Callable[[], None]) -> None:
    st.subheader("Quick Tax Estimate")
    st.text_input("Annual Income (₹)", key=INCOME_KEY)
    st.selectbox("Regime", REGIMES, key=REGIME_KEY, format_func=str.title)
    st.text_input("80C Deductions (old)", key=D80C_KEY)
    st.text_input("80D Deductions (old)", key=D80D_KEY)
    st.text_input("Other Deductions (old)", key=OTHER_KEY)

    ready = current_input(state) is not None
    st.button(
        "Calculating…" if state["calc_loading"] else "Calculate",
        key=BUTTON_KEY,
        type="primary",
        on_click=on_calculate,
        disabled=not ready or state["calc_loading"],
    )

    # Shown once, on the rerun that follows the failed call
    error = state.pop("calc_error", None)
    if error:
        st.error(error)

    if state.get("calc_result"):
        render_result(state["calc_result"])
