#!/usr/bin/python3
import argparse
import logging
import re
import sys
import typing

from symdiff.domain import COMPLEX, REAL, Domain, formatNumber
from symdiff.eqparser import ParseError, parse
from symdiff.expression import Expression
from symdiff.xmath import UndefinedVariable

logger = logging.getLogger(__name__)

complexLiteral = re.compile(r'(?<![a-z_])\d+(?:\.\d*)?j(?![a-z0-9_])', re.IGNORECASE)

def looksComplex(text: str) -> bool:
    "Whether the text contains an imaginary literal such as `2j`"
    return complexLiteral.search(text) is not None

def parseBinding(arg: str) -> tuple[str, str]:
    "Split `name=value`, raise `argparse.ArgumentTypeError` on malformed pair"
    name, sep, value = arg.partition('=')
    name, value = name.strip(), value.strip()
    if not sep or not name or not value:
        raise argparse.ArgumentTypeError(f'expected name=value, got "{arg}"')
    return name, value

def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='symdiff', description='Evaluate and differentiate expressions')
    parser.add_argument('expression', help='Expression such as "x^2 + sin(y)"')
    parser.add_argument('bindings', nargs='*', type=parseBinding, metavar='name=value', help='Variable values')
    parser.add_argument('-d', '--diff', action='append', default=[], metavar='VAR', help='Differentiate against VAR, can be repeated')
    parser.add_argument('--complex', action='store_true', help='Evaluate over complex numbers')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug messages')
    return parser

def chooseDomain(args: argparse.Namespace) -> Domain:
    texts = [args.expression] + [value for _, value in args.bindings]
    if args.complex or any(looksComplex(t) for t in texts):
        return COMPLEX
    return REAL

def report(label: str, expr: Expression, variables: dict[str, typing.Any], out: typing.TextIO) -> None:
    "Print the expression and its value if every variable is bound"
    print(f'{label}: {expr}', file=out)
    missing = [v for v in expr.getRequirements() if v not in variables]
    if missing:
        logger.info('not evaluating %s, unbound: %s', label, ', '.join(missing))
        return
    print(f'{label} value: {formatNumber(expr.evaluate(variables), parseable=False)}', file=out)

def run(argv: list[str] | None = None, out: typing.TextIO = sys.stdout, err: typing.TextIO = sys.stderr) -> int:
    args = buildParser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    domain = chooseDomain(args)
    logger.debug('using %s domain', domain.name)

    try:
        variables = {name.lower(): domain.parseLiteral(value) for name, value in args.bindings}
        expr = parse(args.expression, domain)
        report('expression', expr, variables, out)
        for var in args.diff:
            report(f'd/d{var.lower()}', expr.diff(var), variables, out)
    except (ParseError, UndefinedVariable, ValueError, TypeError) as e:
        print(f'error: {e}', file=err)
        return 1

    return 0

def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        pass

if __name__ == '__main__':
    main()
