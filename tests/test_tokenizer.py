from symdiff.tokenizer import normalize, tokenize


def test_normalize_drops_whitespace_and_lowercases():
    assert normalize("  Sin ( X )\t+ 2.5 ") == "sin(x)+2.5"


def test_tokenize_kinds_and_positions():
    assert tokenize("sin(x)+3.14*y") == [
        ("identifier", "sin", 0),
        ("paren", "(", 3),
        ("identifier", "x", 4),
        ("paren", ")", 5),
        ("operator", "+", 6),
        ("number", "3.14", 7),
        ("operator", "*", 11),
        ("identifier", "y", 12),
    ]


def test_numbers():
    assert tokenize("12") == [("number", "12", 0)]
    assert tokenize(".5") == [("number", ".5", 0)]
    assert tokenize("2.5j") == [("number", "2.5j", 0)]
    assert tokenize("2.") == [("number", "2.", 0)]
    assert tokenize("2.*x")[:2] == [("number", "2.", 0), ("operator", "*", 2)]


def test_identifier_with_digits_and_underscore():
    assert tokenize("x_1^y2") == [
        ("identifier", "x_1", 0),
        ("operator", "^", 3),
        ("identifier", "y2", 4),
    ]


def test_unknown_character_is_other():
    assert tokenize("x$1")[1] == ("other", "$", 1)


def test_empty():
    assert tokenize("") == []
