import math

import pytest

from RadicalCalculator import ScientificEngine
from RadicalCalculator import error as E


def test_root():
    assert ScientificEngine.isRoot(9) == 3
    with pytest.raises(E.NegativeRadicandError) as excinfo:
        ScientificEngine.isRoot(-1)
    assert excinfo.value.code == "3035"


def test_logarithms():
    assert ScientificEngine.isLog("log", 1000) == pytest.approx(3, rel=1e-9)
    assert ScientificEngine.isLog("ln", math.e) == pytest.approx(1, rel=1e-9)


@pytest.mark.parametrize("name, number", [("log", 0), ("ln", -2)])
def test_logarithm_domain(name, number):
    with pytest.raises(E.NonPositiveLogarithmError) as excinfo:
        ScientificEngine.isLog(name, number)
    assert excinfo.value.code == "3036"
    assert isinstance(excinfo.value, E.DomainError)


def test_trig_in_degrees_and_radians():
    assert ScientificEngine.isSCT("tan", 45, degree_mode=True) == pytest.approx(1, rel=1e-9)
    assert ScientificEngine.isSCT("sin", math.pi / 2) == pytest.approx(1, rel=1e-9)


def test_dispatch_by_name():
    assert ScientificEngine.unknown_function("abs", -2.5) == 2.5
    assert ScientificEngine.unknown_function("sqrt", 16) == 4


def test_unknown_function_name():
    with pytest.raises(E.CalculationError) as excinfo:
        ScientificEngine.unknown_function("sec", 1)
    assert excinfo.value.code == "2000"


def test_function_table_matches_parser_functions():
    from RadicalCalculator import ExpressionParser
    assert set(ScientificEngine.FUNCTION_TABLE) == ExpressionParser.Functions
