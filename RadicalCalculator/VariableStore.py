# VariableStore.py
"""Named values for the calculator host: user variables, protected constants and 'ans'.

The store is a read-only Mapping, so MathEngine.evaluate() can take it directly;
evaluate() copies it into a snapshot before walking the AST.
"""

import math
import re
from collections.abc import Mapping

from . import ExpressionParser
from . import RadicalEngine
from . import error as E

VAR_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")

CONSTANTS = {
    "e": math.e,
    "pi": math.pi,
    "PI": math.pi,
}

ANS = "ans"

# Leading operators that continue the previous result ('+5' -> 'ans+5'); '-' is unary
CONTINUATION_OPERATORS = ("+", "*", "/", "^")


class VariableStore(Mapping):
    def __init__(self):
        self._variables = dict(CONSTANTS)

    # --- Mapping protocol ---
    def __getitem__(self, name):
        return self._variables[name]

    def __iter__(self):
        return iter(self._variables)

    def __len__(self):
        return len(self._variables)

    def __repr__(self):
        return f"VariableStore({self._variables!r})"

    # --- Store operations ---
    def define(self, name, value):
        if not VAR_NAME_RE.match(name) or name in ExpressionParser.Functions:
            raise E.VariableError(f"Invalid variable name: {name}", code="3040")
        if name in CONSTANTS:
            raise E.VariableError(f"Cannot redefine constant: {name}", code="3041")
        self._variables[name] = value

    def delete(self, name):
        if name in CONSTANTS:
            raise E.VariableError(f"Cannot delete constant: {name}", code="3042")
        self._variables.pop(name, None)

    def clear(self):
        """Drop every user variable (and ans); constants stay."""
        self._variables = dict(CONSTANTS)

    def has_variable(self, name):
        return name in self._variables

    def names(self):
        return list(self._variables)

    def get_all(self):
        return dict(self._variables)

    def user_variables(self):
        return {name: value for name, value in self._variables.items() if name not in CONSTANTS}

    def set_answer(self, value):
        self._variables[ANS] = value

    # --- String preprocessing for the host ---
    def substitute(self, expression):
        """Replace every bound name by its value, longest names first, on word boundaries only."""
        result = expression
        for name in sorted(self._variables, key=len, reverse=True):
            value = self._variables[name]
            shown = RadicalEngine.format_number(value)
            if value < 0:
                shown = f"({shown})"
            result = re.sub(rf"\b{re.escape(name)}\b", lambda match: shown, result)
        return result

    def apply_ans(self, expression):
        """Prefix 'ans' when the input starts with a bare binary operator ('+5' -> 'ans+5')."""
        stripped = expression.lstrip()
        if not stripped.startswith(CONTINUATION_OPERATORS):
            return expression
        if ANS not in self._variables:
            raise E.VariableError("No value in ans", code="3043")
        return ANS + stripped
