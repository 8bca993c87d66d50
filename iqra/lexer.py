from .consts import *
from .utils import Token, Position
from .errors import IllegalCharError, NumberError, StringError


def is_arabic(char):
    return any(low <= char <= high for low, high in ARABIC_RANGES)


def is_identifier_start(char):
    return char in LETTERS or char == "_" or is_arabic(char)


def is_identifier_char(char):
    return char in LETTERS_DIGITS or char == "_" or is_arabic(char)


def is_number_char(char):
    return char in DIGITS or char == "." or char in ARABIC_DIGITS


SINGLE_CHAR_TOKENS = {
    "+": TT_PLUS,
    "-": TT_MINUS,
    "*": TT_MUL,
    "%": TT_MOD,
    "(": TT_LPAREN,
    ")": TT_RPAREN,
    "{": TT_LBRACE,
    "}": TT_RBRACE,
    "[": TT_LSQUARE,
    "]": TT_RSQUARE,
    ",": TT_COMMA,
    ";": TT_SEMICOLON,
}

ESCAPE_CHARACTERS = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


class Lexer:
    __slots__ = ["fn", "text", "pos", "current_char"]

    def __init__(self, fn, text):
        self.fn = fn
        self.text = text
        self.pos = Position(-1, 0, -1, fn, text)
        self.current_char = None
        self.advance()

    def advance(self):
        self.pos.advance(self.current_char)
        self.current_char = (
            self.text[self.pos.idx] if self.pos.idx < len(self.text) else None
        )

    def peek(self, steps=1):
        idx = self.pos.idx + steps
        if 0 <= idx < len(self.text):
            return self.text[idx]
        return None

    def make_tokens(self):
        tokens = []
        while True:
            token, error = self.next_token()
            if error:
                return [], error
            tokens.append(token)
            if token.type == TT_EOF:
                return tokens, None

    def next_token(self):
        while self.current_char is not None:
            if self.current_char.isspace() and self.current_char != "\n":
                self.advance()
            elif self.current_char == "/" and self.peek() == "/":
                self.skip_comment()
            else:
                break

        if self.current_char is None:
            return Token(TT_EOF, pos_start=self.pos), None

        char = self.current_char

        if char == "\n":
            pos_start = self.pos.copy()
            self.advance()
            return Token(TT_NEWLINE, pos_start=pos_start), None
        if is_number_char(char):
            return self.make_number()
        if is_identifier_start(char):
            return self.make_identifier(), None
        if char == '"':
            return self.make_string()
        if char in SINGLE_CHAR_TOKENS:
            pos_start = self.pos.copy()
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[char], pos_start=pos_start), None
        if char == "/":
            pos_start = self.pos.copy()
            self.advance()
            return Token(TT_DIV, pos_start=pos_start), None
        if char == "=":
            return self.make_two_char(TT_EQ, "=", TT_EE), None
        if char == "<":
            return self.make_two_char(TT_LT, "=", TT_LTE), None
        if char == ">":
            return self.make_two_char(TT_GT, "=", TT_GTE), None
        if char == "!":
            return self.make_not(), None
        if char in "&|":
            return self.make_logical(), None

        pos_start = self.pos.copy()
        self.advance()
        return None, IllegalCharError(pos_start, self.pos, char)

    def skip_comment(self):
        while self.current_char is not None and self.current_char != "\n":
            self.advance()

    def make_number(self):
        num_str = ""
        pos_start = self.pos.copy()

        while self.current_char is not None and is_number_char(self.current_char):
            num_str += self.current_char
            self.advance()

        try:
            value = float(num_str.translate(ARABIC_DIGIT_MAP))
        except ValueError:
            return None, NumberError(pos_start, self.pos, num_str)
        return Token(TT_NUMBER, value, pos_start, self.pos), None

    def make_identifier(self):
        id_str = ""
        pos_start = self.pos.copy()

        while self.current_char is not None and is_identifier_char(self.current_char):
            id_str += self.current_char
            self.advance()

        if id_str in KEYWORDS:
            return Token(TT_KEYWORD, KEYWORDS[id_str], pos_start, self.pos)
        return Token(TT_IDENTIFIER, id_str, pos_start, self.pos)

    def make_string(self):
        string = ""
        pos_start = self.pos.copy()
        escape_character = False
        self.advance()

        while self.current_char is not None and (
            self.current_char != '"' or escape_character
        ):
            if escape_character:
                if self.current_char in ESCAPE_CHARACTERS:
                    string += ESCAPE_CHARACTERS[self.current_char]
                else:
                    string += "\\" + self.current_char
                escape_character = False
            elif self.current_char == "\\":
                escape_character = True
            else:
                string += self.current_char
            self.advance()

        if self.current_char != '"':
            return None, StringError(pos_start, self.pos)
        self.advance()
        return Token(TT_STRING, string, pos_start, self.pos), None

    def make_two_char(self, single_type, second, double_type):
        pos_start = self.pos.copy()
        self.advance()
        if self.current_char == second:
            self.advance()
            return Token(double_type, pos_start=pos_start, pos_end=self.pos)
        return Token(single_type, pos_start=pos_start, pos_end=self.pos)

    def make_not(self):
        pos_start = self.pos.copy()
        self.advance()
        if self.current_char == "=":
            self.advance()
            return Token(TT_NE, pos_start=pos_start, pos_end=self.pos)
        return Token(TT_KEYWORD, "not", pos_start, self.pos)

    def make_logical(self):
        char = self.current_char
        pos_start = self.pos.copy()
        self.advance()
        if self.current_char == char:
            self.advance()
            keyword = "and" if char == "&" else "or"
            return Token(TT_KEYWORD, keyword, pos_start, self.pos)
        # lone '&' / '|' pass through as identifiers
        return Token(TT_IDENTIFIER, char, pos_start, self.pos)
