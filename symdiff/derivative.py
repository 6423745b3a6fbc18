import logging

from symdiff import simplify as s
from symdiff.domain import Domain, REAL
from symdiff.xmath import BinaryOp, Constant, Fun, FunCall, Node, Op, UnsupportedOperation, Variable, postorder, render

logger = logging.getLogger(__name__)

def derivative(node: Node, var: str, domain: Domain = REAL) -> Node:
    """Partial derivative of the tree against `var`

    The result is assembled only through the combinators of `symdiff.simplify`,
    so each new sum, product and quotient is already simplified.

    Arguments:
        node (Node): The differentiated tree
        var (str): Name of the variable, case insensitive
        domain (Domain): Numeric domain of the constants introduced by the rules
    """
    result = _derive(node, var.lower(), domain)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('d/d%s %s = %s', var, render(node), render(result))
    return result

def _derive(node: Node, var: str, domain: Domain) -> Node:
    zero = Constant(domain.zero())
    one = Constant(domain.one())
    derived: dict[int, Node] = {}

    for n in postorder(node):
        if isinstance(n, Constant):
            d = zero
        elif isinstance(n, Variable):
            d = one if n.name == var else zero
        elif isinstance(n, BinaryOp):
            d = _binaryRule(n, derived[id(n.left)], derived[id(n.right)], domain)
        else:
            d = _functionRule(n, derived[id(n.arg)], domain)
        derived[id(n)] = d

    return derived[id(node)]

def _binaryRule(node: BinaryOp, dl: Node, dr: Node, domain: Domain) -> Node:
    l, r = node.left, node.right

    if node.op == Op.ADD:
        return s.add(dl, dr)
    if node.op == Op.SUB:
        return s.sub(dl, dr)
    if node.op == Op.MUL:
        return s.add(s.mul(dl, r), s.mul(l, dr))
    if node.op == Op.DIV:
        two = Constant(domain.coerce(2))
        return s.div(s.sub(s.mul(dl, r), s.mul(l, dr)), s.pow(r, two))
    if node.op == Op.POW:
        # l^r * (l' * r/l + r' * ln(l)), valid for l > 0 when r is not constant
        inner = s.add(s.mul(dl, s.div(r, l)), s.mul(dr, s.ln(l)))
        return s.mul(s.pow(l, r), inner)
    raise UnsupportedOperation(f'Cannot differentiate operator {node.op!r}')

def _functionRule(node: FunCall, da: Node, domain: Domain) -> Node:
    a = node.arg

    if node.fun == Fun.SIN:
        return s.mul(s.cos(a), da)
    if node.fun == Fun.COS:
        return s.mul(s.negate(s.sin(a), domain), da)
    if node.fun == Fun.EXP:
        return s.mul(s.exp(a), da)
    if node.fun == Fun.LN:
        return s.mul(s.div(Constant(domain.one()), a), da)
    raise UnsupportedOperation(f'Cannot differentiate function {node.fun!r}')
