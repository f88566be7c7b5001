"""Runtime values. treelox has four kinds of value, carried directly as Python objects:

    nil     -> None
    boolean -> bool
    number  -> float (IEEE double)
    string  -> str

bool is a subclass of int in Python, so every type check below has to rule it out explicitly.
"""

import math


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Strict equality, no coercion across types."""
    if left is None:
        return right is None
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_number(left) != is_number(right):
        return False
    return left == right


def divide(left, right):
    """IEEE division: Python raises on a zero divisor, doubles don't."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def stringify(value):
    """Textual form used by print and string concatenation."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"

    if is_number(value):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"

        if float(value).is_integer() and abs(value) < 1e21:
            return str(int(value))  # also drops the sign of -0
        return str(float(value))

    return str(value)
