from dataclasses import dataclass
from enum import Enum, auto

from query_errors import (
    UnexpectedCharacter,
    UnexpectedLetter,
    UnterminatedQuote,
)


class TokenType(Enum):
    """検索式のトークン種別"""

    AND = auto()
    OR = auto()
    NOT = auto()
    LPAREN = auto()
    RPAREN = auto()
    KEYWORD = auto()


@dataclass(frozen=True)
class Token:
    """検索式中の1トークン

    text は KEYWORD なら引用符の中身、それ以外は記号そのもの。
    position は入力文字列中の開始位置。
    """

    type: TokenType
    text: str
    position: int

    def __repr__(self) -> str:
        if self.type is TokenType.KEYWORD:
            return f"Keyword({self.text!r})"
        return self.type.name


SYMBOLS = {
    "&": TokenType.AND,
    "|": TokenType.OR,
    "!": TokenType.NOT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

QUOTES = ('"', "'")

WHITESPACE = (" ", "\t", "\n", "\r")


def tokenize(query: str) -> list[Token]:
    """検索式の文字列をトークン列に変換する"""
    tokens: list[Token] = []

    quote = None  # 引用符の中にいる間は開始した引用符文字
    start = 0
    buffer: list[str] = []

    for position, char in enumerate(query):
        if quote is not None:
            if char == quote:
                tokens.append(Token(TokenType.KEYWORD, "".join(buffer), start))
                quote = None
            else:
                buffer.append(char)
            continue

        if char in SYMBOLS:
            tokens.append(Token(SYMBOLS[char], char, position))
        elif char in WHITESPACE:
            continue
        elif char in QUOTES:
            quote = char
            start = position
            buffer = []
        elif char.isalpha():
            raise UnexpectedLetter(char, position)
        else:
            raise UnexpectedCharacter(char, position)

    if quote is not None:
        raise UnterminatedQuote(quote, start)

    return tokens
