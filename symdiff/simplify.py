"""Node combinators with construction-time peephole simplification

Every combinator looks only at its immediate operands: it drops neutral
elements, collapses absorbing ones and folds two constants into one. Nothing
is rewritten below that level, operands are never reordered.
"""
import numpy as np

from symdiff.domain import Domain, arith, isOne, isZero
from symdiff.xmath import BinaryOp, Constant, Fun, FunCall, Node, Op

def isConst(node: Node, test) -> bool:
    return isinstance(node, Constant) and bool(test(node.value))

def like(node: Constant, value) -> Constant:
    "Constant `value` with the numeric type of `node`"
    return Constant(np.result_type(node.value).type(value))

def fold(op: Op, left: Node, right: Node) -> Node:
    if isinstance(left, Constant) and isinstance(right, Constant):
        return Constant(arith(op.value, left.value, right.value))
    return BinaryOp(op, left, right)

def add(left: Node, right: Node) -> Node:
    if isConst(left, isZero):
        return right
    if isConst(right, isZero):
        return left
    return fold(Op.ADD, left, right)

def negate(node: Node, domain: Domain) -> Node:
    "Multiply by -1"
    return mul(Constant(domain.coerce(-1)), node)

def sub(left: Node, right: Node) -> Node:
    if isConst(right, isZero):
        return left
    if isConst(left, isZero):
        return mul(like(left, -1), right)
    return fold(Op.SUB, left, right)

def mul(left: Node, right: Node) -> Node:
    if isConst(left, isZero):
        return left
    if isConst(right, isZero):
        return right
    if isConst(left, isOne):
        return right
    if isConst(right, isOne):
        return left
    return fold(Op.MUL, left, right)

def div(left: Node, right: Node) -> Node:
    if isConst(right, isOne):
        return left
    if isConst(left, isZero):
        return left
    return fold(Op.DIV, left, right)

def pow(left: Node, right: Node) -> Node:
    if isConst(right, isOne):
        return left
    if isConst(right, isZero):
        return like(right, 1)
    return fold(Op.POW, left, right)

def sin(arg: Node) -> Node:
    return FunCall(Fun.SIN, arg)

def cos(arg: Node) -> Node:
    return FunCall(Fun.COS, arg)

def ln(arg: Node) -> Node:
    return FunCall(Fun.LN, arg)

def exp(arg: Node) -> Node:
    return FunCall(Fun.EXP, arg)

binary = {
    Op.ADD: add,
    Op.SUB: sub,
    Op.MUL: mul,
    Op.DIV: div,
    Op.POW: pow,
}

functions = {
    Fun.SIN: sin,
    Fun.COS: cos,
    Fun.LN: ln,
    Fun.EXP: exp,
}
