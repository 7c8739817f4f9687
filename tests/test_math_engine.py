import math

import pytest

from RadicalCalculator import ExpressionParser
from RadicalCalculator import MathEngine
from RadicalCalculator import error as E


def run(problem, settings, variables=None):
    return MathEngine.evaluate(problem, variables, settings)


@pytest.mark.parametrize("problem, expected", [
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("10 - 4 - 3", 3),
    ("2 ^ 3 ^ 2", 64),
    ("-2^2", 4),
    ("2^-2", 0.25),
    ("-(3 + 4)", -7),
    ("7 / 2", 3.5),
    ("abs(-3) + 1", 4),
])
def test_decimal_results(problem, expected, settings):
    result = run(problem, settings)
    assert result.success
    assert result.value == pytest.approx(expected, rel=1e-9)
    assert result.decimal_form == result.value


@pytest.mark.parametrize("problem, radical", [
    ("sqrt(3) + sqrt(3)", "2√3"),
    ("sqrt(8) + sqrt(2)", "3√2"),
    ("sqrt(72)", "6√2"),
    ("sqrt(8) / 2", "√2"),
    ("(1 + sqrt(2)) ^ 2", "3 + 2√2"),
    ("2 * sqrt(5) - sqrt(5)", "√5"),
    ("sqrt(12) * 3", "6√3"),
])
def test_exact_radical_forms(problem, radical, settings):
    result = run(problem, settings)
    assert result.success
    assert str(result.radical_form) == radical
    assert result.radical_form.value == pytest.approx(result.value, rel=1e-9)


@pytest.mark.parametrize("problem, expected", [
    ("sqrt(2) * sqrt(3) + 1", math.sqrt(2) * math.sqrt(3) + 1),
    ("(1 + sqrt(5)) / 2", (1 + math.sqrt(5)) / 2),
    ("log(50) + ln(3)", math.log10(50) + math.log(3)),
    ("abs(-7.25) * 4 / 3", 7.25 * 4 / 3),
    ("(sqrt(3) - sqrt(2)) ^ 4", (math.sqrt(3) - math.sqrt(2)) ** 4),
    ("(1 + sqrt(2)) ^ 20", (1 + math.sqrt(2)) ** 20),
])
def test_decimal_and_radical_forms_agree(problem, expected, settings):
    result = run(problem, settings)
    assert result.value == pytest.approx(expected, rel=1e-9)
    if result.radical_form is not None:
        assert result.radical_form.value == pytest.approx(expected, rel=1e-9)


@pytest.mark.parametrize("problem", ["(1 - sqrt(2)) ^ 1000", "(sqrt(2) - 1) ^ 2000"])
def test_huge_exact_power_keeps_decimal_result(problem, settings):
    result = run(problem, settings)
    assert result.success
    assert result.value == 0
    assert result.radical_form is None


def test_large_exact_power_stays_exact(settings):
    result = run("(1 + sqrt(2)) ^ 20", settings)
    assert result.radical_form.has_radicals
    assert str(result.radical_form) == "22619537 + 15994428√2"


def test_radicals_that_collapse_to_integers(settings):
    squared = run("sqrt(3) ^ 2", settings)
    assert str(squared.radical_form) == "3"
    assert not squared.radical_form.has_radicals
    assert squared.value == pytest.approx(3, rel=1e-9)

    product = run("sqrt(2) * sqrt(8)", settings)
    assert str(product.radical_form) == "4"

    conjugates = run("(1 + sqrt(2)) * (1 - sqrt(2))", settings)
    assert str(conjugates.radical_form) == "-1"
    assert conjugates.value == pytest.approx(-1, rel=1e-9)


def test_perfect_square_has_no_radical_terms(settings):
    result = run("sqrt(16)", settings)
    assert result.value == 4
    assert not result.radical_form.has_radicals


def test_decimal_factor_scales_radical_form(settings):
    assert str(run("sqrt(2) * 1.5", settings).radical_form) == "1.5√2"
    assert run("1.5", settings).radical_form is None


def test_division_by_radical_drops_radical_form(settings):
    result = run("1 / sqrt(2)", settings)
    assert result.success
    assert result.radical_form is None
    assert result.value == pytest.approx(1 / math.sqrt(2), rel=1e-9)


def test_sqrt_of_non_integer_has_no_radical_form(settings):
    assert run("sqrt(2.25)", settings).radical_form is None


def test_sqrt_above_exact_limit_has_no_radical_form(settings):
    settings["max_exact_integer"] = 100
    assert run("sqrt(200)", settings).radical_form is None
    assert str(run("sqrt(50)", settings).radical_form) == "5√2"


@pytest.mark.parametrize("problem, code", [
    ("5 / 0", "3003"),
    ("1 / (2 - 2)", "3003"),
    ("sqrt(-4)", "3035"),
    ("log(0)", "3036"),
    ("ln(-1)", "3036"),
    ("(-8) ^ 0.5", "3037"),
    ("10 ^ 400", "3026"),
    ("2 3", "3033"),
    ("2 # 3", "3030"),
    ("2 + (3", "3031"),
    ("", "3027"),
])
def test_failures_are_reported_not_raised(problem, code, settings):
    result = run(problem, settings)
    assert not result.success
    assert result.value is None
    assert result.error_code == code
    assert result.error


def test_division_by_zero_message(settings):
    assert run("5/0", settings).error == "Division by zero"


def test_undefined_variables_are_listed(settings):
    result = run("x + y * x + 2", settings, {})
    assert not result.success
    assert result.error_code == "3034"
    assert result.error == "Undefined variable(s): x, y"


def test_variables_are_substituted(settings):
    result = run("x + 2", settings, {"x": 5})
    assert result.value == 7
    assert not result.radical_form.has_radicals


def test_variable_inside_sqrt_keeps_exact_form(settings):
    result = run("sqrt(x)", settings, {"x": 18})
    assert str(result.radical_form) == "3√2"


def test_variables_are_snapshotted(settings):
    variables = {"x": 1}
    run("x", settings, variables)
    assert variables == {"x": 1}


def test_degree_mode(settings):
    settings["degree_mode"] = True
    assert run("sin(90)", settings).value == pytest.approx(1, rel=1e-9)
    assert run("cos(180)", settings).value == pytest.approx(-1, rel=1e-9)


def test_radian_mode_by_default(settings):
    assert run("sin(0)", settings).value == 0
    assert run("cos(0)", settings).value == 1


def test_invalid_ast_node(settings):
    with pytest.raises(E.CalculationError) as excinfo:
        MathEngine.evaluate_node(object(), {}, settings)
    assert excinfo.value.code == "3038"


def test_unexpected_exception_becomes_failure(settings, monkeypatch):
    def broken(problem):
        raise RuntimeError("boom")

    monkeypatch.setattr(ExpressionParser, "parse_expression", broken)
    result = run("1 + 1", settings)

    assert not result.success
    assert result.error_code == "9999"
    assert "boom" in result.error


def test_evaluation_result_constructors():
    ok = MathEngine.EvaluationResult.ok(2.0)
    assert ok.success and ok.value == 2.0 and ok.error is None

    failed = MathEngine.EvaluationResult.failure("nope", "3003")
    assert not failed.success
    assert failed.error_code == "3003"
