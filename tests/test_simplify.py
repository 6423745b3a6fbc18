import numpy as np
import pytest

from symdiff import simplify as s
from symdiff.domain import COMPLEX, REAL
from symdiff.xmath import BinaryOp, Constant, Fun, FunCall, Op, Variable, render

x = Variable("x")
y = Variable("y")


def c(value):
    return Constant(np.float64(value))


class TestAdd:
    def test_zero_left(self):
        assert s.add(c(0), x) is x

    def test_zero_right(self):
        assert s.add(x, c(0)) is x

    def test_folds_constants(self):
        assert s.add(c(2), c(3)) == c(5)

    def test_keeps_operand_order(self):
        assert s.add(x, y) == BinaryOp(Op.ADD, x, y)
        assert s.add(y, x) == BinaryOp(Op.ADD, y, x)


class TestSub:
    def test_zero_right(self):
        assert s.sub(x, c(0)) is x

    def test_zero_left_negates(self):
        assert s.sub(c(0), x) == BinaryOp(Op.MUL, c(-1), x)

    def test_folds_constants(self):
        assert s.sub(c(5), c(3)) == c(2)

    def test_generic(self):
        assert render(s.sub(x, y)) == "(x-y)"


class TestMul:
    def test_zero(self):
        assert s.mul(c(0), x) == c(0)
        assert s.mul(x, c(0)) == c(0)

    def test_one(self):
        assert s.mul(c(1), x) is x
        assert s.mul(x, c(1)) is x

    def test_folds_constants(self):
        assert s.mul(c(2), c(3)) == c(6)


class TestDiv:
    def test_one_denominator(self):
        assert s.div(x, c(1)) is x

    def test_zero_numerator(self):
        assert s.div(c(0), x) == c(0)

    def test_folds_constants(self):
        assert s.div(c(6), c(4)) == c(1.5)

    def test_division_by_zero_is_not_guarded(self):
        assert s.div(c(1), c(0)).value == np.inf


class TestPow:
    def test_exponent_one(self):
        assert s.pow(x, c(1)) is x

    def test_exponent_zero(self):
        assert s.pow(x, c(0)) == c(1)

    def test_zero_to_zero_is_one(self):
        assert s.pow(c(0), c(0)) == c(1)

    def test_folds_constants(self):
        assert s.pow(c(2), c(10)) == c(1024)


def test_functions_never_simplify():
    assert s.sin(c(0)) == FunCall(Fun.SIN, c(0))
    assert s.exp(c(0)) == FunCall(Fun.EXP, c(0))
    assert render(s.ln(c(1))) == "ln(1)"
    assert render(s.cos(x)) == "cos(x)"


def test_rules_apply_only_to_new_node():
    inner = BinaryOp(Op.ADD, x, c(0))
    assert s.mul(inner, y) == BinaryOp(Op.MUL, inner, y)


def test_negate():
    assert render(s.negate(x, REAL)) == "(-1*x)"
    assert s.negate(c(2), REAL) == c(-2)


def test_complex_rewrite_constants_keep_type():
    zero = Constant(np.complex128(0))
    one = s.pow(x, zero)
    assert isinstance(one.value, np.complex128)
    neg = s.negate(x, COMPLEX)
    assert isinstance(neg.left.value, np.complex128)


@pytest.mark.parametrize("tree", [
    x,
    c(2.5),
    BinaryOp(Op.DIV, x, y),
    FunCall(Fun.SIN, BinaryOp(Op.POW, x, c(2))),
])
def test_identities_keep_text(tree):
    assert render(s.mul(tree, c(1))) == render(tree)
    assert render(s.add(tree, c(0))) == render(tree)
