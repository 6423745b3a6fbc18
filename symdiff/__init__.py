"Symbolic differentiation and evaluation of scalar expressions over real or complex numbers"

from symdiff.domain import COMPLEX, REAL, ComplexDomain, Domain, RealDomain, getDomain
from symdiff.eqparser import ParseError, parse
from symdiff.expression import Expression, cos, exp, ln, sin
from symdiff.xmath import UndefinedVariable, UnsupportedOperation

__all__ = [
    'Expression', 'parse',
    'sin', 'cos', 'ln', 'exp',
    'Domain', 'RealDomain', 'ComplexDomain', 'REAL', 'COMPLEX', 'getDomain',
    'ParseError', 'UndefinedVariable', 'UnsupportedOperation',
]
