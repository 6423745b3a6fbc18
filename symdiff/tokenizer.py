from pyparsing import OneOrMore, Regex, Word, alphanums, alphas, one_of

def namer(name):
    return lambda s, loc, toks: (name, toks[0], loc)

# --- Token definitions ---
number = Regex(r'\d+\.?\d*j?|\.\d+j?').set_parse_action(namer("number"))
identifier = Word(alphas, alphanums + '_').set_parse_action(namer("identifier"))
operator = one_of("+ - * / ^").set_parse_action(namer("operator"))
paren = one_of("( )").set_parse_action(namer("paren"))
other = Regex(r".").set_parse_action(namer("other"))

# --- Assemble tokenizer ---
token = number | identifier | operator | paren | other

tokenizer = OneOrMore(token)

def normalize(code: str) -> str:
    "Drop whitespace and lower-case the letters"
    return ''.join(code.split()).lower()

def tokenize(code: str) -> list[tuple[str, str, int]]:
    "Split normalized code into `(kind, text, position)` tokens"
    if not code:
        return []
    return list(tokenizer.parse_string(code, parse_all=True))
