import logging

from symdiff import simplify
from symdiff.domain import Domain, REAL
from symdiff.expression import Expression
from symdiff.tokenizer import normalize, tokenize
from symdiff.xmath import Constant, Fun, Node, Op, Variable, render

logger = logging.getLogger(__name__)

class ParseError(SyntaxError):
    """Malformed expression text

    Attributes:
        reason (str): What is wrong
        position (int): Index into the text given to `parse`
    """
    def __init__(self, reason: str, position: int) -> None:
        super().__init__(f'{reason} at position {position}')
        self.reason = reason
        self.position = position

Token = tuple[str, str, int]

# Binding strength of the binary operators, equal priorities reduce left to right
PRIORITIES = {
    Op.ADD: 1,
    Op.SUB: 1,
    Op.MUL: 2,
    Op.DIV: 2,
    Op.POW: 3,
}

FUNCTIONS = {f.value: f for f in Fun}
OPERATORS = {o.value: o for o in Op}

def parse(text: str, domain: Domain = REAL) -> Expression:
    "Parse the text into expression, raise `ParseError` on malformed input"
    code = normalize(text)
    tokens = tokenize(code)
    try:
        root = parseTokens(tokens, domain, len(code))
    except ParseError as e:
        raise ParseError(e.reason, originalPosition(text, e.position)) from None
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('parsed %r as %s', text, render(root))
    return Expression(root, domain)

def originalPosition(text: str, position: int) -> int:
    "Map index in the whitespace-free text back to index in `text`"
    offsets = [i for i, ch in enumerate(text) if not ch.isspace()]
    if position < len(offsets):
        return offsets[position]
    return len(text)

def matchingParen(tokens: list[Token], start: int) -> int:
    "Index of the `)` closing the `(` at `start`, -1 if there is none"
    depth = 0
    for i in range(start, len(tokens)):
        kind, text, _ = tokens[i]
        if kind != 'paren':
            continue
        depth += 1 if text == '(' else -1
        if depth == 0:
            return i
    return -1

def unaryEnd(tokens: list[Token], start: int) -> int:
    "Index after the run negated by unary minus: up to the next operator at the same depth"
    depth = 0
    for i in range(start, len(tokens)):
        kind, text, _ = tokens[i]
        if kind == 'operator' and depth == 0:
            return i
        if kind == 'paren':
            if text == '(':
                depth += 1
            elif depth == 0:
                return i
            else:
                depth -= 1
    return len(tokens)

def reduce(operands: list[Node], op: Op, loc: int) -> None:
    "Pop two operands and push the operator applied to them"
    if len(operands) < 2:
        raise ParseError(f"missing operand for '{op.value}'", loc)
    right = operands.pop()
    left = operands.pop()
    operands.append(simplify.binary[op](left, right))

def parseTokens(tokens: list[Token], domain: Domain, end: int) -> Node:
    """Shunting-yard pass over the tokens

    Arguments:
        tokens (list[Token]): Tokens of the (sub)expression
        domain (Domain): Domain of the numeric literals
        end (int): Position reported when the input ends prematurely
    """
    operands: list[Node] = []
    operators: list[tuple[Op | None, int]] = []  # None marks '('
    expectOperand = True
    i = 0

    while i < len(tokens):
        kind, text, loc = tokens[i]

        if kind == 'number':
            if not expectOperand:
                raise ParseError(f"unexpected number '{text}'", loc)
            try:
                operands.append(Constant(domain.parseLiteral(text)))
            except ValueError:
                raise ParseError(f"invalid number '{text}' in {domain.name} domain", loc)
            expectOperand = False

        elif kind == 'identifier':
            if not expectOperand:
                raise ParseError(f"unexpected name '{text}'", loc)
            if text in FUNCTIONS:
                if i + 1 >= len(tokens) or tokens[i + 1][1] != '(':
                    raise ParseError(f"function '{text}' must be followed by '('", loc)
                close = matchingParen(tokens, i + 1)
                if close < 0:
                    raise ParseError(f"unmatched '(' in call of '{text}'", tokens[i + 1][2])
                if close == i + 2:
                    raise ParseError(f"empty argument of '{text}'", tokens[i + 1][2])
                arg = parseTokens(tokens[i + 2:close], domain, tokens[close][2])
                operands.append(simplify.functions[FUNCTIONS[text]](arg))
                i = close
            else:
                operands.append(Variable(text))
            expectOperand = False

        elif kind == 'operator':
            op = OPERATORS[text]
            if expectOperand:
                if op != Op.SUB:
                    raise ParseError(f"unexpected operator '{text}'", loc)
                stop = unaryEnd(tokens, i + 1)
                if stop == i + 1:
                    raise ParseError("missing operand of unary '-'", loc)
                stopLoc = tokens[stop][2] if stop < len(tokens) else end
                operands.append(simplify.negate(parseTokens(tokens[i + 1:stop], domain, stopLoc), domain))
                expectOperand = False
                i = stop
                continue

            while operators and operators[-1][0] is not None and PRIORITIES[operators[-1][0]] >= PRIORITIES[op]: # type: ignore
                reduce(operands, *operators.pop()) # type: ignore
            operators.append((op, loc))
            expectOperand = True

        elif kind == 'paren':
            if text == '(':
                if not expectOperand:
                    raise ParseError("unexpected '('", loc)
                operators.append((None, loc))
            else:
                while operators and operators[-1][0] is not None:
                    reduce(operands, *operators.pop()) # type: ignore
                if not operators:
                    raise ParseError("unmatched ')'", loc)
                if expectOperand:
                    raise ParseError("missing operand before ')'", loc)
                operators.pop()
                expectOperand = False

        else:
            raise ParseError(f"unexpected character '{text}'", loc)

        i += 1

    while operators:
        op, loc = operators.pop()
        if op is None:
            raise ParseError("unmatched '('", loc)
        reduce(operands, op, loc)

    if not operands:
        raise ParseError('empty expression', end)
    if len(operands) > 1:
        raise ParseError('expected a single expression', end)
    return operands[0]
