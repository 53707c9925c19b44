class ParseError(ValueError):
    """検索式の解析エラーの基底クラス"""

    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (位置: {position})"
        super().__init__(message)


class UnexpectedLetter(ParseError):
    """引用符の外に英字が現れた"""

    def __init__(self, character: str, position: int):
        self.character = character
        super().__init__(
            f"予期しない英字 '{character}': キーワードは引用符で囲んでください",
            position,
        )


class UnexpectedCharacter(ParseError):
    """引用符の外に認識できない文字が現れた"""

    def __init__(self, character: str, position: int):
        self.character = character
        super().__init__(f"予期しない文字 '{character}'", position)


class UnterminatedQuote(ParseError):
    """引用符が閉じられないまま入力が終了した"""

    def __init__(self, quote: str, position: int):
        self.quote = quote
        super().__init__(f"引用符 {quote} が閉じられていません", position)


class UnclosedGroup(ParseError):
    """'(' に対応する ')' がない

    token は ')' があるべき位置にあったトークン（入力終了なら None）。
    """

    def __init__(self, position: int | None, token=None):
        self.token = token
        super().__init__("対応する ')' がありません", position)


class UnexpectedToken(ParseError):
    """文法上許されない位置にトークンが現れた"""

    def __init__(self, token):
        self.token = token
        super().__init__(f"予期しないトークン: {token.text}", token.position)


class UnexpectedEndOfInput(ParseError):
    """式の途中でトークンが尽きた"""

    def __init__(self, message: str = "予期しない式の終了"):
        super().__init__(message)


class NestingTooDeep(ParseError):
    """括弧や NOT の入れ子が深すぎる"""

    def __init__(self, token, limit: int):
        self.token = token
        self.limit = limit
        super().__init__(f"入れ子が深すぎます (上限: {limit})", token.position)
