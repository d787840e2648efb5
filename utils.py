"""Display helpers."""

import math


def format_inr(value) -> str:
    """Format a number with Indian digit grouping, e.g. 1200000 -> '12,00,000'.

    Fractions keep at most three digits. Anything that is not a real number is
    returned as ``str(value)``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        text = f"{abs(value):.3f}".rstrip("0").rstrip(".")
    else:
        text = str(abs(value))

    digits, _, fraction = text.partition(".")
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)

    formatted = ",".join(groups)
    if fraction:
        formatted += "." + fraction
    if value < 0 and formatted != "0":
        formatted = "-" + formatted
    return formatted
