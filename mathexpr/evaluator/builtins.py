"""
Ready-made evaluators.

- evaluate_numeric:     floats and ints via the math module (statistics via numpy)
- evaluate_integer:     exact arbitrary-precision integers
- evaluate_complex:     complex numbers via cmath
- evaluate_string:      fully parenthesised infix text
- evaluate_rpn_string:  postfix text accepted by parse_rpn

Each accepts a single tree or the list returned by parse().
"""

import cmath
import math
import operator
from typing import Any, List

import numpy as np

from .evaluator import Evaluator, comma

PHI = (1 + math.sqrt(5)) / 2

# Tolerance for complex equality and ordering
EPSILON = 1e-12


# ============================================================================
# Real-valued evaluator
# ============================================================================

def _factorial(x):
    if x > 170:
        return math.inf
    if float(x).is_integer():
        return float(math.factorial(int(x)))
    return math.gamma(x + 1)


def _modulo(a, b):
    """Floored modulo: the result takes the sign of b."""
    return a % b


def _power(a, b):
    """Float power; overflow saturates to a signed infinity like _factorial."""
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and float(b).is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf


def _mean(*values):
    return float(np.mean(values))


def _variance(*values):
    return float(np.var(values))


def _std(*values):
    return float(np.std(values))


NUMERIC_CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
    "phi": PHI,
}

NUMERIC_FUNCTIONS = {
    # Trigonometric
    "sin": math.sin, "cos": math.cos, "tan": math.tan,
    "asin": math.asin, "acos": math.acos, "atan": math.atan,
    "arcsin": math.asin, "arccos": math.acos, "arctan": math.atan,
    "atan2": math.atan2,
    "sec": lambda x: 1 / math.cos(x),
    "csc": lambda x: 1 / math.sin(x),
    "cot": lambda x: 1 / math.tan(x),
    "sinh": math.sinh, "cosh": math.cosh, "tanh": math.tanh,
    "asinh": math.asinh, "acosh": math.acosh, "atanh": math.atanh,
    "arcsinh": math.asinh, "arccosh": math.acosh, "arctanh": math.atanh,
    "deg": math.radians,

    # Exponential and logarithmic
    "^": _power,
    "exp": math.exp,
    "ln": math.log,
    "lg": math.log2,
    "log": math.log10,
    "sqrt": math.sqrt,

    # Rounding
    "abs": abs,
    "ceil": math.ceil,
    "floor": math.floor,
    "round": round,

    # Arithmetic
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "//": operator.floordiv,
    "%": _modulo,
    "mod": _modulo,
    "negate": operator.neg,
    "!": _factorial,

    # Comparison
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,

    # Lists and statistics
    ",": comma,
    "sum": lambda *values: float(np.sum(values)),
    "min": min,
    "max": max,
    "mean": _mean,
    "ave": _mean,
    "var": _variance,
    "variance": _variance,
    "std": _std,
}

numeric_evaluator = Evaluator(NUMERIC_CONSTANTS, NUMERIC_FUNCTIONS)
evaluate_numeric = numeric_evaluator.make_evaluator()


# ============================================================================
# Exact integer evaluator
# ============================================================================

def _integral(value):
    """Number wrapper rejecting literals with a fractional part."""
    if isinstance(value, int):
        return value
    if float(value).is_integer():
        return int(value)
    raise ValueError(f"{value!r} is not an integer")


def _truncating_divide(a, b):
    """Integer division rounding toward zero."""
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _integer_power(a, b):
    if b < 0:
        raise ValueError("negative exponent")
    return a ** b


INTEGER_FUNCTIONS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_divide,
    "//": operator.floordiv,
    "%": operator.mod,
    "mod": operator.mod,
    "^": _integer_power,
    "negate": operator.neg,
    "!": math.factorial,
    "abs": abs,
    "gcd": math.gcd,
    "lcm": math.lcm,
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    ",": comma,
}

integer_evaluator = Evaluator({}, INTEGER_FUNCTIONS, number_wrapper=_integral)
evaluate_integer = integer_evaluator.make_evaluator()


# ============================================================================
# Complex evaluator
# ============================================================================

def _complex_equal(a, b):
    return abs(a - b) < EPSILON


def _complex_factorial(z):
    if abs(z.imag) < EPSILON and float(z.real).is_integer() and z.real >= 0:
        return complex(math.factorial(int(z.real)))
    raise ValueError("factorial is only defined for non-negative integers")


def _complex_floor(z):
    return complex(math.floor(z.real), math.floor(z.imag))


def _complex_ceil(z):
    return complex(math.ceil(z.real), math.ceil(z.imag))


def _complex_round(z):
    return complex(round(z.real), round(z.imag))


def _complex_mod(a, b):
    return a - b * _complex_floor(a / b)


def _complex_negate(z):
    # 0 - z keeps a +0.0 imaginary part, so sqrt(-4) stays on the upper branch
    return 0 - z


def _complex_atan2(y, x):
    if abs(y.imag) < EPSILON and abs(x.imag) < EPSILON:
        return complex(math.atan2(y.real, x.real))
    # Principal branch of arg(x + iy)
    return -1j * cmath.log((x + 1j * y) / cmath.sqrt(x * x + y * y))


COMPLEX_CONSTANTS = {
    "pi": complex(math.pi),
    "e": complex(math.e),
    "phi": complex(PHI),
    "i": 1j,
    "I": 1j,
}

COMPLEX_FUNCTIONS = {
    # Parts
    "re": lambda z: complex(z.real), "real": lambda z: complex(z.real),
    "im": lambda z: complex(z.imag), "imag": lambda z: complex(z.imag),
    "arg": lambda z: complex(cmath.phase(z)), "Arg": lambda z: complex(cmath.phase(z)),
    "abs": lambda z: complex(abs(z)),
    "conj": lambda z: z.conjugate(),

    # Trigonometric
    "sin": cmath.sin, "cos": cmath.cos, "tan": cmath.tan,
    "asin": cmath.asin, "acos": cmath.acos, "atan": cmath.atan,
    "arcsin": cmath.asin, "arccos": cmath.acos, "arctan": cmath.atan,
    "atan2": _complex_atan2,
    "sec": lambda z: 1 / cmath.cos(z),
    "csc": lambda z: 1 / cmath.sin(z),
    "cot": lambda z: 1 / cmath.tan(z),
    "sinh": cmath.sinh, "cosh": cmath.cosh, "tanh": cmath.tanh,
    "asinh": cmath.asinh, "acosh": cmath.acosh, "atanh": cmath.atanh,
    "arcsinh": cmath.asinh, "arccosh": cmath.acosh, "arctanh": cmath.atanh,
    "deg": lambda z: z * math.pi / 180,

    # Exponential and logarithmic
    "^": operator.pow,
    "exp": cmath.exp,
    "ln": cmath.log,
    "log": cmath.log10,
    "sqrt": cmath.sqrt,

    # Rounding
    "ceil": _complex_ceil,
    "floor": _complex_floor,
    "round": _complex_round,

    # Arithmetic
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "//": lambda a, b: _complex_floor(a / b),
    "%": _complex_mod,
    "mod": _complex_mod,
    "negate": _complex_negate,
    "!": _complex_factorial,

    # Comparison (ordering is by magnitude)
    "==": _complex_equal,
    "!=": lambda a, b: not _complex_equal(a, b),
    "<": lambda a, b: abs(a) < abs(b) - EPSILON,
    "<=": lambda a, b: abs(a) <= abs(b) + EPSILON,
    ">": lambda a, b: abs(a) > abs(b) + EPSILON,
    ">=": lambda a, b: abs(a) >= abs(b) - EPSILON,

    ",": comma,
}

complex_evaluator = Evaluator(COMPLEX_CONSTANTS, COMPLEX_FUNCTIONS, number_wrapper=complex)
evaluate_complex = complex_evaluator.make_evaluator()


# ============================================================================
# String evaluators
# ============================================================================

SYMBOL_CONSTANTS = {
    "pi": "π",
    "e": "e",
    "phi": "φ",
    "i": "i",
    "I": "i",
}


def _infix(symbol):
    return lambda a, b: f"({a}{symbol}{b})"


def _call(name: str, args: List[Any]) -> str:
    return f"{name}({','.join(args)})"


STRING_FUNCTIONS = {
    "+": _infix("+"),
    "-": _infix("-"),
    "*": _infix("*"),
    "/": _infix("/"),
    "//": _infix("//"),
    "^": _infix("^"),
    "%": _infix(" mod "),
    "=": _infix("="),
    "==": _infix("=="),
    "!=": _infix("!="),
    "<": _infix("<"),
    "<=": _infix("<="),
    ">": _infix(">"),
    ">=": _infix(">="),
    "negate": lambda a: f"-({a})",
    "!": lambda a: f"{a}!",
    "deg": lambda a: f"{a}°",
    "abs": lambda a: f"|{a}|",
    ",": lambda a, b: f"{a},{b}",
}

string_evaluator = Evaluator(SYMBOL_CONSTANTS, STRING_FUNCTIONS, default=_call, number_wrapper=str)
evaluate_string = string_evaluator.make_evaluator()


def _postfix(name: str, args: List[Any]) -> str:
    return " ".join(list(args) + [name])


# Constants keep their names so the output parses back with parse_rpn
rpn_evaluator = Evaluator(
    {name: name for name in SYMBOL_CONSTANTS},
    {},
    default=_postfix,
    number_wrapper=str
)
evaluate_rpn_string = rpn_evaluator.make_evaluator()
