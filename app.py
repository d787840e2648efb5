import logging

import streamlit as st

import calculator
import chat
from api_client import BackendClient
from config import load_settings

settings = load_settings()
logging.basicConfig(level=settings.log_level)

# 1. PAGE SETUP
st.set_page_config(page_title="India Tax Chatbot", page_icon="💰", layout="wide")
st.title("💰 India Tax Chatbot")
st.caption("Demo – Informational only")


# 2. SETUP API
# One client per backend URL, shared by every session of this server.
@st.cache_resource
def get_backend(base_url, timeout):
    return BackendClient(base_url, timeout=timeout)


backend = get_backend(settings.backend_url, settings.request_timeout)

# 3. INITIALIZE SESSION STATE
chat.init_chat_state(st.session_state)
calculator.init_calculator_state(st.session_state)


# 4. ACTIONS
# Callbacks only queue the request and raise the busy flag. The backend call
# happens at the bottom of the script, after the controls are drawn disabled.
def on_chat_submit():
    chat.submit_message(st.session_state, st.session_state.get(chat.INPUT_KEY) or "")


def on_estimate(result):
    chat.append_estimate_summary(st.session_state, result)


def on_calculate():
    calculator.request_calculation(st.session_state)


# 5. SIDEBAR: QUICK CALCULATOR
with st.sidebar:
    calculator.render_calculator(st.session_state, on_calculate)

    st.markdown("---")
    st.markdown("**What can I ask?**")
    st.markdown(
        "- New vs Old regime differences\n"
        "- Basic slab rates and cess\n"
        "- Common deductions like 80C and 80D\n"
        "- Very rough tax estimates"
    )

# 6. DISPLAY CHAT HISTORY
chat.render_chat(st.session_state, settings.transcript_height)
st.caption("For education only. Consult a professional for advice.")

# 7. HANDLE USER INPUT
st.chat_input(
    chat.INPUT_PLACEHOLDER,
    key=chat.INPUT_KEY,
    on_submit=on_chat_submit,
    disabled=st.session_state.sending,
)

# 8. RUN PENDING REQUESTS
if st.session_state.calc_loading:
    with st.sidebar, st.spinner("Calculating..."):
        calculator.complete_calculation(st.session_state, backend, on_calculated=on_estimate)
    st.rerun()

if st.session_state.sending:
    with st.spinner("Thinking..."):
        chat.deliver_pending(st.session_state, backend)
    st.rerun()
