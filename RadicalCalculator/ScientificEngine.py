# ScientificEngine
import math

from . import error as E


def isRoot(number):
    if number < 0:
        raise E.NegativeRadicandError(f"Square root of negative number: sqrt({number})")
    return math.sqrt(number)


def isAbs(number):
    return abs(number)


def isSCT(name, number, degree_mode=False):  # Sin / Cos / Tan
    if degree_mode:
        number = math.radians(number)

    if name == "sin":
        return math.sin(number)
    elif name == "cos":
        return math.cos(number)
    elif name == "tan":
        return math.tan(number)
    else:
        raise E.CalculationError(f"Sin/Cos/Tan was recognized, but '{name}' couldn't be assigned.", code="2000")


def isLog(name, number):
    if number <= 0:
        label = "Logarithm" if name == "log" else "Natural logarithm"
        raise E.NonPositiveLogarithmError(f"{label} of non-positive number: {name}({number})")

    if name == "log":
        return math.log10(number)
    return math.log(number)


FUNCTION_TABLE = {
    "sqrt": lambda number, degree_mode: isRoot(number),
    "abs": lambda number, degree_mode: isAbs(number),
    "sin": lambda number, degree_mode: isSCT("sin", number, degree_mode),
    "cos": lambda number, degree_mode: isSCT("cos", number, degree_mode),
    "tan": lambda number, degree_mode: isSCT("tan", number, degree_mode),
    "log": lambda number, degree_mode: isLog("log", number),
    "ln": lambda number, degree_mode: isLog("ln", number),
}


def unknown_function(name, number, degree_mode=False):
    """Apply a named single-argument function, raising a DomainError outside its domain."""
    try:
        function = FUNCTION_TABLE[name]
    except KeyError:
        raise E.CalculationError(f"Unknown function: {name}", code="2000")
    return function(number, degree_mode)
