from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from kmp_search import build_failure_table, search
from query_errors import (
    NestingTooDeep,
    UnclosedGroup,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from query_tokenizer import Token, TokenType, tokenize

# 括弧と NOT の入れ子の上限（パーサの再帰の深さを抑える）
MAX_NESTING = 100


class BooleanExpression(ABC):
    """ブール式の抽象基底クラス"""

    @abstractmethod
    def evaluate(self, text: str) -> bool:
        """テキストに対してブール式を評価する"""
        pass


@dataclass(frozen=True, repr=False)
class Keyword(BooleanExpression):
    """単一キーワードの検索

    キーワードは小文字化して保持し、KMP法の失敗テーブルを構築時に一度だけ計算する。
    """

    keyword: str
    table: tuple[int, ...] = field(init=False, compare=False)

    def __post_init__(self):
        keyword = self.keyword.lower()
        object.__setattr__(self, "keyword", keyword)
        object.__setattr__(self, "table", build_failure_table(keyword))

    def evaluate(self, text: str) -> bool:
        return search(self.keyword, self.table, text.lower())

    def __repr__(self) -> str:
        return f"Keyword({self.keyword!r})"


@dataclass(frozen=True, repr=False)
class AndExpression(BooleanExpression):
    """AND演算を表現するクラス"""

    left: BooleanExpression
    right: BooleanExpression

    def evaluate(self, text: str) -> bool:
        return evaluate(self, text)

    def __repr__(self) -> str:
        return render(self)


@dataclass(frozen=True, repr=False)
class OrExpression(BooleanExpression):
    """OR演算を表現するクラス"""

    left: BooleanExpression
    right: BooleanExpression

    def evaluate(self, text: str) -> bool:
        return evaluate(self, text)

    def __repr__(self) -> str:
        return render(self)


@dataclass(frozen=True, repr=False)
class NotExpression(BooleanExpression):
    """NOT演算を表現するクラス"""

    operand: BooleanExpression

    def evaluate(self, text: str) -> bool:
        return evaluate(self, text)

    def __repr__(self) -> str:
        return render(self)


class BooleanParser:
    """トークン列を再帰下降でパースしてBooleanExpressionオブジェクトを生成するクラス

    優先順位は NOT > AND > OR で、同じ優先順位の二項演算子は左結合。
    """

    def __init__(self, max_nesting: int = MAX_NESTING):
        self.tokens: List[Token] = []
        self.position = 0
        self.depth = 0
        self.max_nesting = max_nesting

    def parse(self, tokens: List[Token]) -> BooleanExpression:
        """トークン列全体をパースする"""
        self.tokens = list(tokens)
        self.position = 0
        self.depth = 0

        if not self.tokens:
            raise UnexpectedEndOfInput("空の検索式です")

        result = self._parse_or()

        # 式の後ろに余ったトークンは受け付けない
        if self.position < len(self.tokens):
            raise UnexpectedToken(self.tokens[self.position])

        return result

    def _current_token(self) -> Token | None:
        """現在のトークンを取得"""
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _consume_token(self) -> Token | None:
        """現在のトークンを消費して次に進む"""
        if self.position < len(self.tokens):
            token = self.tokens[self.position]
            self.position += 1
            return token
        return None

    def _at(self, token_type: TokenType) -> bool:
        token = self._current_token()
        return token is not None and token.type is token_type

    def _enter(self, token: Token):
        self.depth += 1
        if self.depth > self.max_nesting:
            raise NestingTooDeep(token, self.max_nesting)

    def _parse_or(self) -> BooleanExpression:
        """OR演算子をパースする（最低優先度）"""
        left = self._parse_and()

        while self._at(TokenType.OR):
            self._consume_token()  # | を消費
            right = self._parse_and()
            left = OrExpression(left, right)

        return left

    def _parse_and(self) -> BooleanExpression:
        """AND演算子をパースする（中間優先度）"""
        left = self._parse_not()

        while self._at(TokenType.AND):
            self._consume_token()  # & を消費
            right = self._parse_not()
            left = AndExpression(left, right)

        return left

    def _parse_not(self) -> BooleanExpression:
        """NOT演算子をパースする（高優先度）"""
        if self._at(TokenType.NOT):
            self._enter(self._consume_token())  # ! を消費
            operand = self._parse_not()
            self.depth -= 1
            return NotExpression(operand)

        return self._parse_primary()

    def _parse_primary(self) -> BooleanExpression:
        """基本要素（キーワードや括弧）をパースする"""
        token = self._consume_token()

        if token is None:
            raise UnexpectedEndOfInput()

        if token.type is TokenType.KEYWORD:
            return Keyword(token.text)

        if token.type is TokenType.LPAREN:
            self._enter(token)
            expr = self._parse_or()
            if not self._at(TokenType.RPAREN):
                raise UnclosedGroup(token.position, self._current_token())
            self._consume_token()  # ) を消費
            self.depth -= 1
            return expr

        raise UnexpectedToken(token)


def evaluate(node: BooleanExpression, text: str) -> bool:
    """ブール式をテキストに対して評価する（AND/ORは短絡評価）

    長い演算子の連鎖でも再帰しないよう、未評価の親ノードをスタックで管理する。
    スタック上の二項演算子は常に左辺を評価中で、左辺で結果が決まらなければ
    親を取り除いて右辺へ進む（右辺の値がそのまま親の値になる）。
    """
    folded = text.lower()
    pending: list[BooleanExpression] = []
    current = node

    while True:
        while True:
            if isinstance(current, (AndExpression, OrExpression)):
                pending.append(current)
                current = current.left
            elif isinstance(current, NotExpression):
                pending.append(current)
                current = current.operand
            elif isinstance(current, Keyword):
                result = search(current.keyword, current.table, folded)
                break
            else:
                result = bool(current.evaluate(text))
                break

        while pending:
            parent = pending.pop()
            if isinstance(parent, NotExpression):
                result = not result
            elif isinstance(parent, AndExpression) == result:
                # AND で左辺が真、または OR で左辺が偽なら右辺で決まる
                current = parent.right
                break
        else:
            return result


def render(node: BooleanExpression) -> str:
    """構文木を読みやすい文字列にする（深い木でも再帰しない）"""
    parts: list[str] = []
    stack: list[tuple[BooleanExpression, bool]] = [(node, False)]

    while stack:
        current, expanded = stack.pop()
        if isinstance(current, (AndExpression, OrExpression)):
            if expanded:
                right = parts.pop()
                left = parts.pop()
                op = "AND" if isinstance(current, AndExpression) else "OR"
                parts.append(f"({left} {op} {right})")
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        elif isinstance(current, NotExpression):
            if expanded:
                parts.append(f"NOT {parts.pop()}")
            else:
                stack.append((current, True))
                stack.append((current.operand, False))
        else:
            parts.append(repr(current))

    return parts.pop()


def parse_boolean_expression(expression: str) -> BooleanExpression:
    """ブール式文字列をパースしてBooleanExpressionオブジェクトを返す

    簡単なファクトリー関数として提供
    """
    parser = BooleanParser()
    return parser.parse(tokenize(expression))
