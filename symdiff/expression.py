import numbers
import typing

from symdiff import simplify
from symdiff.derivative import derivative
from symdiff.domain import COMPLEX, Domain, REAL, common
from symdiff.xmath import Constant, Context, Node, Variable, evaluate, getRequirements, render

class Expression:
    """Immutable handle of an expression tree

    Every operation returns a new `Expression`, the operands are left intact.
    Trees are shared between expressions, nodes are never mutated.

    Attributes:
        root (Node): Root of the tree
        domain (Domain): Numeric domain of the constants and of the evaluation
    """
    __slots__ = ('root', 'domain')

    def __init__(self, value: "Node | str | numbers.Number", domain: Domain = REAL) -> None:
        if isinstance(value, Node):
            root = value
        elif isinstance(value, str):
            if not value:
                raise ValueError('Variable name must not be empty')
            root = Variable(value.lower())
        else:
            root = Constant(domain.coerce(value))
        object.__setattr__(self, 'root', root)
        object.__setattr__(self, 'domain', domain)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def _wrap(self, other) -> "Expression":
        if isinstance(other, Expression):
            return other
        if isinstance(other, numbers.Real):
            return Expression(other, self.domain)
        if isinstance(other, numbers.Complex):
            return Expression(other, COMPLEX)
        return NotImplemented

    def _binary(self, combinator, other, reflected=False) -> "Expression":
        other = self._wrap(other)
        if other is NotImplemented:
            return NotImplemented
        left, right = (other, self) if reflected else (self, other)
        return Expression(combinator(left.root, right.root), common(left.domain, right.domain))

    def add(self, other) -> "Expression":
        return self._binary(simplify.add, other)

    def sub(self, other) -> "Expression":
        return self._binary(simplify.sub, other)

    def mul(self, other) -> "Expression":
        return self._binary(simplify.mul, other)

    def div(self, other) -> "Expression":
        return self._binary(simplify.div, other)

    def pow(self, other) -> "Expression":
        return self._binary(simplify.pow, other)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __pow__ = pow

    def __radd__(self, other):
        return self._binary(simplify.add, other, reflected=True)

    def __rsub__(self, other):
        return self._binary(simplify.sub, other, reflected=True)

    def __rmul__(self, other):
        return self._binary(simplify.mul, other, reflected=True)

    def __rtruediv__(self, other):
        return self._binary(simplify.div, other, reflected=True)

    def __rpow__(self, other):
        return self._binary(simplify.pow, other, reflected=True)

    def __neg__(self) -> "Expression":
        return Expression(simplify.negate(self.root, self.domain), self.domain)

    def sin(self) -> "Expression":
        return Expression(simplify.sin(self.root), self.domain)

    def cos(self) -> "Expression":
        return Expression(simplify.cos(self.root), self.domain)

    def ln(self) -> "Expression":
        return Expression(simplify.ln(self.root), self.domain)

    def exp(self) -> "Expression":
        return Expression(simplify.exp(self.root), self.domain)

    def evaluate(self, variables: typing.Mapping[str, typing.Any] | None = None, **kwargs):
        "Value of the expression, raise `UndefinedVariable` if some variable is not bound"
        return evaluate(self.root, Context({**(variables or {}), **kwargs}, self.domain))

    def diff(self, var: str) -> "Expression":
        "Symbolic partial derivative against `var`"
        return Expression(derivative(self.root, var, self.domain), self.domain)

    def toText(self) -> str:
        return render(self.root)

    def getRequirements(self) -> list[str]:
        "Sorted names of the free variables"
        return sorted(getRequirements(self.root))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.root == other.root

    def __hash__(self) -> int:
        return hash(self.root)

    def __repr__(self) -> str:
        return f'Expression("{self.toText()}")'

    def __str__(self) -> str:
        return self.toText()

def sin(expr: Expression) -> Expression:
    return expr.sin()

def cos(expr: Expression) -> Expression:
    return expr.cos()

def ln(expr: Expression) -> Expression:
    return expr.ln()

def exp(expr: Expression) -> Expression:
    return expr.exp()
