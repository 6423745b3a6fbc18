import math

import pytest

from symdiff import COMPLEX, parse


def d(text, var="x", domain=None):
    expr = parse(text) if domain is None else parse(text, domain)
    return expr.diff(var)


class TestRules:
    def test_constant(self):
        assert d("42").toText() == "0"

    def test_variable(self):
        assert d("x").toText() == "1"
        assert d("y").toText() == "0"

    def test_sum_and_difference(self):
        assert d("x+5").toText() == "1"
        assert d("x-y").toText() == "1"
        assert d("y-x").toText() == "-1"

    def test_product(self):
        assert d("x*y").toText() == "y"
        assert d("3*x").toText() == "3"

    def test_quotient(self):
        derived = d("1/x")
        assert derived.toText() == "(-1/(x^2))"
        assert derived.evaluate({"x": 2}) == -0.25

    def test_power_with_constant_exponent(self):
        derived = d("x^2")
        assert derived.toText() == "((x^2)*(2/x))"
        assert derived.evaluate({"x": 2}) == 4

    def test_power_with_constant_base(self):
        derived = d("2^x")
        assert derived.toText() == "((2^x)*ln(2))"
        assert derived.evaluate({"x": 1}) == pytest.approx(2 * math.log(2))

    def test_power_with_variable_base_and_exponent(self):
        assert d("x^x").evaluate({"x": 1}) == pytest.approx(1)
        assert d("x^x").evaluate({"x": 2}) == pytest.approx(4 * (math.log(2) + 1))

    def test_sin(self):
        assert d("sin(x)").toText() == "cos(x)"
        assert d("sin(x)").evaluate({"x": 0}) == 1

    def test_cos(self):
        assert d("cos(x)").toText() == "(-1*sin(x))"
        assert d("cos(x)").evaluate({"x": math.pi / 2}) == pytest.approx(-1)

    def test_exp(self):
        assert d("exp(x)").toText() == "exp(x)"

    def test_ln(self):
        assert d("ln(x)").toText() == "(1/x)"
        assert d("ln(x)").evaluate({"x": 1}) == 1


def test_chain_rule():
    derived = d("sin(x^2)")
    assert derived.evaluate({"x": 1.5}) == pytest.approx(math.cos(2.25) * 3)


def test_partial_derivative_treats_other_variables_as_constants():
    derived = d("x*y^2 + sin(y)", var="y")
    assert derived.evaluate({"x": 3, "y": 2}) == pytest.approx(3 * 2 * 2 + math.cos(2))


def test_variable_name_is_case_insensitive():
    assert d("X^2", var="X").evaluate({"x": 3}) == pytest.approx(6)


def test_second_derivative():
    assert d("x^3").diff("x").evaluate({"x": 2}) == pytest.approx(12)


def test_original_is_unchanged():
    expr = parse("x*sin(x)")
    expr.diff("x")
    assert expr.toText() == "(x*sin(x))"


def test_complex_domain():
    derived = d("exp(x)", domain=COMPLEX)
    assert derived.domain is COMPLEX
    assert derived.evaluate({"x": math.pi * 1j}) == pytest.approx(-1)
