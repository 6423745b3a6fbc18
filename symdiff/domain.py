import typing
import numpy as np

class Domain:
    """Numeric type that expressions are built and evaluated over

    Attributes:
        name (str): Registry key of the domain
        dtype (type): numpy scalar type holding the values
    """
    name = ''
    dtype: typing.Callable = np.float64

    functions = {
        'sin': np.sin,
        'cos': np.cos,
        'ln': np.log,
        'exp': np.exp,
    }

    def coerce(self, value) -> typing.Any:
        "Convert a python or numpy number into a value of this domain"
        return self.dtype(value)

    def parseLiteral(self, text: str) -> typing.Any:
        "Convert a numeric literal into a value, raise `ValueError` if the domain can't hold it"
        return self.dtype(text)

    def zero(self):
        return self.dtype(0)

    def one(self):
        return self.dtype(1)

    def call(self, fname: str, value):
        "Apply one of the transcendental functions"
        with np.errstate(all='ignore'):
            return self.functions[fname](value)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}()'

class RealDomain(Domain):
    "Real numbers as numpy float64"
    name = 'real'
    dtype = np.float64

    def parseLiteral(self, text: str) -> np.float64:
        if text.endswith('j'):
            raise ValueError(f'imaginary literal {text} in real domain')
        return np.float64(float(text))

class ComplexDomain(Domain):
    "Complex numbers as numpy complex128, functions use the principal branch"
    name = 'complex'
    dtype = np.complex128

    def parseLiteral(self, text: str) -> np.complex128:
        return np.complex128(complex(text))

REAL = RealDomain()
COMPLEX = ComplexDomain()

DOMAINS = {d.name: d for d in (REAL, COMPLEX)}

def getDomain(name: str) -> Domain:
    "Look up domain by its name, raise `KeyError` on unknown name"
    if name not in DOMAINS:
        raise KeyError(f'Unknown domain "{name}", expected one of {", ".join(DOMAINS)}')
    return DOMAINS[name]

def common(a: Domain, b: Domain) -> Domain:
    "The domain able to hold values of both `a` and `b`"
    if a is b:
        return a
    return COMPLEX

def isZero(value) -> bool:
    return value == 0

def isOne(value) -> bool:
    return value == 1

binaryFuns = {
    '+': np.add,
    '-': np.subtract,
    '*': np.multiply,
    '/': np.true_divide,
    '^': np.power,
}

def arith(symbol: str, a, b):
    "Apply binary operator to two domain values with IEEE semantics, without warnings"
    with np.errstate(all='ignore'):
        return binaryFuns[symbol](a, b)

def formatReal(value, parseable: bool = True) -> str:
    """Shortest positional text of a real value

    Non-finite values are spelled as constant expressions when `parseable`,
    so that the parser folds them back into the same value.
    """
    value = float(value)
    if np.isnan(value):
        return '((1/0)-(1/0))' if parseable else 'nan'
    if np.isinf(value):
        if parseable:
            return '(1/0)' if value > 0 else '(-1/0)'
        return 'inf' if value > 0 else '-inf'
    if value == 0:
        return '0'
    return np.format_float_positional(value, trim='-')

def formatNumber(value, parseable: bool = True) -> str:
    "Canonical decimal text of a value, readable back by the parser when `parseable`"
    if isinstance(value, (complex, np.complexfloating)):
        if value.imag == 0:
            return formatReal(value.real, parseable)
        # TODO: spell non-finite parts of a complex constant so they parse back
        im = formatReal(value.imag, False)
        if not im.startswith('-'):
            im = '+' + im
        return f'({formatReal(value.real, False)}{im}j)'
    return formatReal(value, parseable)
