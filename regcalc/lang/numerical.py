"""Signed fixed-width integers. Register values are two's complement integers of WIDTH bits with silent wraparound,
like the 32-bit ints the calculator was first written with. Widening the integers is a visible change: programs that
overflowed before will print different numbers.
"""

import re

WIDTH = 32
WIDTHS = (8, 16, 32, 64)

LITERAL = re.compile(r"[+-]?[0-9]+")


def bounds(width=WIDTH):
    """Returns (min, max) representable with width bits."""
    return -(1 << (width - 1)), (1 << (width - 1)) - 1


def wrap(num, width=WIDTH):
    """Reduces num into the signed range of width bits, discarding overflowed bits."""
    mask = 1 << width
    num &= mask - 1
    if num >> (width - 1):
        num -= mask
    return num


def number(token, width=WIDTH):
    """Returns the int denoted by token, or None if token isn't a decimal literal representable with width bits. Out of
    range literals are not numbers at all, so they fall back to being treated as register names.
    """
    if not LITERAL.fullmatch(token):
        return None

    num = int(token)
    low, high = bounds(width)
    return num if low <= num <= high else None


def add(lhs, rhs, width=WIDTH):
    return wrap(lhs + rhs, width)


def subtract(lhs, rhs, width=WIDTH):
    return wrap(lhs - rhs, width)


def multiply(lhs, rhs, width=WIDTH):
    return wrap(lhs * rhs, width)


def divide(lhs, rhs, width=WIDTH):
    """Integer division truncating toward zero. Raises ZeroDivisionError if rhs is 0."""
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        quotient = -quotient
    return wrap(quotient, width)


OPERATIONS = {"add": add, "subtract": subtract, "multiply": multiply, "divide": divide}


def apply(op, lhs, rhs, width=WIDTH):
    """Applies the operator named op to lhs and rhs."""
    return OPERATIONS[op](lhs, rhs, width)
