from api_client import BackendError

NEW_REGIME_RESULT = {
    "taxable_income": 1125000,
    "tax": 56250,
    "cess": 2250,
    "total_tax": 58500,
    "regime": "new",
}


class FakeBackend:
    """Stands in for BackendClient; records every call it receives."""

    def __init__(self, reply="", result=None, fail=False):
        self.reply = reply
        self.result = result
        self.fail = fail
        self.chat_calls = []
        self.calc_calls = []

    def chat(self, message):
        self.chat_calls.append(message)
        if self.fail:
            raise BackendError("connection refused")
        return self.reply

    def calculate(self, payload):
        self.calc_calls.append(payload)
        if self.fail:
            raise BackendError("connection refused")
        return self.result
