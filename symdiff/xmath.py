import enum
import typing
from dataclasses import dataclass

from symdiff.domain import Domain, REAL, arith, formatNumber

class UndefinedVariable(NameError):
    "Variable used by the expression is missing from the bindings"
    def __init__(self, name: str) -> None:
        super().__init__(f'Variable {name} not defined')
        self.name = name

class UnsupportedOperation(TypeError):
    "Node or operator outside of the known set reached a tree walk"

class Op(enum.Enum):
    "Binary operators, valued by their symbol"
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'

class Fun(enum.Enum):
    "Unary functions, valued by their name"
    SIN = 'sin'
    COS = 'cos'
    LN = 'ln'
    EXP = 'exp'

class Node:
    "Base class for the expression tree nodes"
    __slots__ = ()

@dataclass(frozen=True)
class Constant(Node):
    "A constant numeric value"
    value: typing.Any

@dataclass(frozen=True)
class Variable(Node):
    "Single variable which value is provided by the context"
    name: str

@dataclass(frozen=True)
class BinaryOp(Node):
    "Operator applied to two subexpressions"
    op: Op
    left: Node
    right: Node

@dataclass(frozen=True)
class FunCall(Node):
    "Call of one of the builtin functions"
    fun: Fun
    arg: Node

class Context:
    "Context of variable values used during expression evaluation"
    def __init__(self, variables: typing.Mapping[str, typing.Any] | None = None, domain: Domain = REAL) -> None:
        self.domain = domain
        self.variables = {k.lower(): domain.coerce(v) for k, v in (variables or {}).items()}

    def lookup(self, name: str):
        if name not in self.variables:
            raise UndefinedVariable(name)
        return self.variables[name]

def postorder(node: Node) -> typing.Iterator[Node]:
    "Nodes of the tree, children before their parent, walked with an explicit stack"
    stack = [(node, False)]
    while stack:
        n, expanded = stack.pop()
        if expanded or isinstance(n, (Constant, Variable)):
            yield n
        elif isinstance(n, BinaryOp):
            stack += [(n, True), (n.right, False), (n.left, False)]
        elif isinstance(n, FunCall):
            stack += [(n, True), (n.arg, False)]
        else:
            raise UnsupportedOperation(f'Unknown node {n!r}')

def evaluate(node: Node, context: Context):
    "Evaluates the tree in the given context"
    values = {}
    for n in postorder(node):
        if isinstance(n, Constant):
            value = n.value
        elif isinstance(n, Variable):
            value = context.lookup(n.name)
        elif isinstance(n, BinaryOp):
            value = arith(n.op.value, values[id(n.left)], values[id(n.right)])
        else:
            value = context.domain.call(n.fun.value, values[id(n.arg)])
        values[id(n)] = value
    return values[id(node)]

def render(node: Node) -> str:
    "Fully parenthesized text of the tree"
    texts = {}
    for n in postorder(node):
        if isinstance(n, Constant):
            text = formatNumber(n.value)
        elif isinstance(n, Variable):
            text = n.name
        elif isinstance(n, BinaryOp):
            text = f'({texts[id(n.left)]}{n.op.value}{texts[id(n.right)]})'
        else:
            text = f'{n.fun.value}({texts[id(n.arg)]})'
        texts[id(n)] = text
    return texts[id(node)]

def getRequirements(node: Node) -> set[str]:
    "Returns names of the variables that has to be in the context for the proper evaluation"
    return {n.name for n in postorder(node) if isinstance(n, Variable)}
