import chat
from chat import FALLBACK_REPLY, WELCOME_MESSAGE
from tests.fakes import FakeBackend


def make_state():
    state = {}
    chat.init_chat_state(state)
    return state


def test_seeded_with_single_welcome_message():
    state = make_state()
    assert state["messages"] == [{"role": "assistant", "content": WELCOME_MESSAGE}]
    assert state["sending"] is False

    chat.init_chat_state(state)
    assert len(state["messages"]) == 1


def test_blank_input_is_ignored():
    state = make_state()
    backend = FakeBackend(reply="unused")

    for text in ("", "   ", "\n\t"):
        assert chat.send_message(state, text, backend) is False

    assert len(state["messages"]) == 1
    assert backend.chat_calls == []


def test_successful_send_appends_user_then_reply():
    state = make_state()
    backend = FakeBackend(reply="The new regime has seven slabs.")

    assert chat.send_message(state, "What are the new regime slab rates?", backend) is True

    assert backend.chat_calls == ["What are the new regime slab rates?"]
    assert state["messages"][1:] == [
        {"role": "user", "content": "What are the new regime slab rates?"},
        {"role": "assistant", "content": "The new regime has seven slabs."},
    ]
    assert state["sending"] is False


def test_failed_send_appends_fallback():
    state = make_state()

    chat.send_message(state, "Is HRA exempt?", FakeBackend(fail=True))

    assert state["messages"][1:] == [
        {"role": "user", "content": "Is HRA exempt?"},
        {"role": "assistant", "content": FALLBACK_REPLY},
    ]
    assert state["sending"] is False


def test_estimate_summary_mentions_regime_and_total(new_regime_result):
    state = make_state()

    chat.append_estimate_summary(state, dict(new_regime_result, total_tax=130000))

    assert len(state["messages"]) == 2
    assert state["messages"][-1] == {
        "role": "assistant",
        "content": "Your quick estimate under the NEW regime is Total Tax ₹1,30,000.",
    }


def test_submit_appends_user_message_and_waits():
    state = make_state()

    assert chat.submit_message(state, "What is 80D?") is True

    assert state["messages"][-1] == {"role": "user", "content": "What is 80D?"}
    assert state["pending_message"] == "What is 80D?"
    assert state["sending"] is True


def test_deliver_answers_pending_message():
    state = make_state()
    backend = FakeBackend(reply="Health insurance premiums.")
    chat.submit_message(state, "What is 80D?")

    assert chat.deliver_pending(state, backend) is True

    assert backend.chat_calls == ["What is 80D?"]
    assert state["messages"][-1] == {"role": "assistant", "content": "Health insurance premiums."}
    assert state["sending"] is False
    assert "pending_message" not in state


def test_deliver_without_pending_message_lowers_flag():
    state = make_state()
    state["sending"] = True
    backend = FakeBackend(reply="unused")

    assert chat.deliver_pending(state, backend) is False

    assert backend.chat_calls == []
    assert len(state["messages"]) == 1
    assert state["sending"] is False
