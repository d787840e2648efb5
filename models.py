"""Data shapes shared by the chat and calculator panels."""

from typing import Literal, Union

from typing_extensions import TypedDict

Number = Union[int, float]

REGIMES = ("new", "old")


class Message(TypedDict):
    """One entry of the chat transcript."""

    role: Literal["user", "assistant"]
    content: str


class CalculatorInput(TypedDict):
    """Body of a POST to /api/calc."""

    annual_income: Number
    regime: Literal["old", "new"]
    deductions_80c: Number
    deductions_80d: Number
    other_deductions: Number


class CalculatorResult(TypedDict):
    """Body returned by /api/calc."""

    taxable_income: Number
    tax: Number
    cess: Number
    total_tax: Number
    regime: str
