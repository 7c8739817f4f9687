# MathEngine.py
"""""
Calculation engine for the Radical Calculator.

Pipeline
--------
1) ExpressionParser: tokenize -> validate -> shunting-yard -> AST.
2) Undefined-variable check against the supplied mapping.
3) Evaluator: one recursive walk that returns, for every node, the float value
   and (when the operation keeps it exact) a RadicalExpression.
4) Result: every failure of every phase ends up in one EvaluationResult shape.

The radical side is conservative: whenever exactness cannot be shown locally
(variables, non-integer literals, division by a radical, trig/log functions)
the node returns None and only the float travels upward.
"""""

import logging
import math
import sys

from . import config_manager as config_manager
from . import ExpressionParser
from . import RadicalEngine
from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)


class EvaluationResult:
    """Tagged outcome of evaluate(): either value/decimal_form/radical_form or error/error_code."""
    def __init__(self, success, value=None, radical_form=None, error=None, error_code=None):
        self.success = success
        self.value = value
        self.decimal_form = value
        self.radical_form = radical_form
        self.error = error
        self.error_code = error_code

    @classmethod
    def ok(cls, value, radical_form=None):
        return cls(True, value=value, radical_form=radical_form)

    @classmethod
    def failure(cls, error, error_code="9999"):
        return cls(False, error=error, error_code=error_code)

    def __repr__(self):
        if self.success:
            return f"EvaluationResult(value={self.value!r}, radical_form={self.radical_form})"
        return f"EvaluationResult(error={self.error!r}, code={self.error_code!r})"


# -----------------------------
# Helpers
# -----------------------------

def _checked(result):
    """Raise instead of letting an overflowed float (inf) travel on as a result."""
    if math.isinf(result):
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")
    return result


def _keep_if_finite(radical_form):
    if radical_form is not None and not radical_form.is_finite():
        return None
    return radical_form


def _is_exact_integer(value, settings):
    return value >= 0 and float(value).is_integer() and value <= settings["max_exact_integer"]


def _exact_power_fits(radical_form, exponent):
    """Whether expanding radical_form ** exponent keeps every coefficient inside the float range."""
    bound = abs(radical_form.constant) + sum(abs(term.coefficient) * math.sqrt(term.radicand)
                                             for term in radical_form.terms)
    return bound <= 1 or exponent * math.log(bound) < math.log(sys.float_info.max)


def _combine_sum(left_radical, left_value, right_radical, right_value):
    """Radical form of left + right where either side may lack one."""
    if left_radical is not None and right_radical is not None:
        return RadicalEngine.add_radical_expressions(left_radical, right_radical)
    elif left_radical is not None:
        return RadicalEngine.create_radical_expression(left_radical.terms, left_radical.constant + right_value)
    elif right_radical is not None:
        return RadicalEngine.create_radical_expression(right_radical.terms, right_radical.constant + left_value)
    return None


# -----------------------------
# Evaluator
# -----------------------------

def evaluate_node(node, variables, settings):
    """Return (float value, RadicalExpression or None) for an AST node."""
    if isinstance(node, ExpressionParser.Number):
        value = _checked(node.value)
        if value.is_integer():
            return value, RadicalEngine.create_radical_expression([], value)
        return value, None

    elif isinstance(node, ExpressionParser.Variable):
        if node.name not in variables:
            raise E.UndefinedVariableError([node.name])
        return float(variables[node.name]), None

    elif isinstance(node, ExpressionParser.Operator):
        if node.is_unary:
            value, radical_form = evaluate_node(node.right, variables, settings)
            if radical_form is not None:
                radical_form = RadicalEngine.negate_radical_expression(radical_form)
            return -value, radical_form
        return _evaluate_binary(node, variables, settings)

    elif isinstance(node, ExpressionParser.Function):
        return _evaluate_function(node, variables, settings)

    raise E.CalculationError(f"Invalid AST node: {node!r}", code="3038")


def _evaluate_binary(node, variables, settings):
    if node.left is None:
        raise E.CalculationError(f"Invalid binary operator: {node.operator}", code="3038")

    left_value, left_radical = evaluate_node(node.left, variables, settings)
    right_value, right_radical = evaluate_node(node.right, variables, settings)
    radical_form = None

    if node.operator == '+':
        result = left_value + right_value
        radical_form = _combine_sum(left_radical, left_value, right_radical, right_value)

    elif node.operator == '-':
        result = left_value - right_value
        negated_right = None
        if right_radical is not None:
            negated_right = RadicalEngine.negate_radical_expression(right_radical)
        radical_form = _combine_sum(left_radical, left_value, negated_right, -right_value)

    elif node.operator == '*':
        result = left_value * right_value
        if left_radical is not None and right_radical is not None:
            radical_form = RadicalEngine.multiply_radical_expressions(left_radical, right_radical)
        elif left_radical is not None:
            radical_form = RadicalEngine.scale_radical_expression(left_radical, right_value)
        elif right_radical is not None:
            radical_form = RadicalEngine.scale_radical_expression(right_radical, left_value)

    elif node.operator == '/':
        if right_value == 0:
            raise E.DivisionByZeroError()
        result = left_value / right_value
        # Only division by a plain scalar keeps the exact form
        if left_radical is not None and (right_radical is None or not right_radical.has_radicals):
            radical_form = RadicalEngine.divide_radical_expression(left_radical, right_value)

    elif node.operator == '^':
        try:
            result = math.pow(left_value, right_value)
        except ValueError:
            raise E.DomainError(f"Power has no real result: {left_value}^{right_value}", code="3037")
        except OverflowError:
            raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")
        if (left_radical is not None and right_value >= 0 and right_value.is_integer()
                and _exact_power_fits(left_radical, right_value)):
            radical_form = RadicalEngine.power_radical_expression(left_radical, int(right_value))

    else:
        raise E.CalculationError(f"Unknown operator: {node.operator}", code="3004")

    return _checked(result), _keep_if_finite(radical_form)


def _evaluate_function(node, variables, settings):
    # Arguments travel as floats only; sqrt rebuilds an exact form from its argument
    argument, _ = evaluate_node(node.arg, variables, settings)
    result = ScientificEngine.unknown_function(node.name, argument, settings["degree_mode"])

    radical_form = None
    if node.name == "sqrt" and _is_exact_integer(argument, settings):
        simplified = RadicalEngine.simplify(argument)
        radical_form = RadicalEngine.create_radical_expression(
            [RadicalEngine.RadicalTerm(simplified.coefficient, simplified.radicand)])

    return _checked(result), radical_form


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem, variables=None, settings=None):
    """Main API: parse -> undefined-variable check -> dual evaluation -> EvaluationResult.

    variables is any mapping of name -> number (a VariableStore works); it is
    copied once so the walk sees a fixed snapshot. Never raises.
    """
    settings = config_manager.resolve_settings(settings)
    snapshot = dict(variables) if variables is not None else {}

    try:
        parsed = ExpressionParser.parse_expression(problem)
        if not parsed.is_valid:
            raise E.SyntaxError(parsed.error, code=parsed.error_code or "3031")

        missing = [name for name in parsed.variables if name not in snapshot]
        if missing:
            raise E.UndefinedVariableError(missing)

        value, radical_form = evaluate_node(parsed.ast, snapshot, settings)
        logger.debug("%r -> %r (radical form: %s)", problem, value, radical_form)
        return EvaluationResult.ok(value, radical_form)

    # Domain errors from every phase share one result shape
    except E.MathError as e:
        e.equation = problem
        logger.info("Evaluation of %r failed [%s]: %s", problem, e.code, e.message)
        return EvaluationResult.failure(e.message, e.code)
    # Unexpected Python exceptions are reported, not raised to the caller
    except Exception as e:
        logger.exception("Unexpected error while evaluating %r", problem)
        return EvaluationResult.failure(f"Unexpected Error: {e}", "9999")
