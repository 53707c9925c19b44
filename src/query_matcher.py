"""検索式を一度コンパイルして何度でもテキストに適用するためのクラス

例:
    >>> matcher = compile_query('("this" | "that") & "these" & "those"')
    >>> matcher.matches("this these those")
    True
    >>> matcher.matches("this that these")
    False
"""

from dataclasses import dataclass

from boolean_parser import BooleanExpression, evaluate, parse_boolean_expression


@dataclass(frozen=True)
class QueryMatcher:
    """コンパイル済みの検索式

    構築後は変更されないため、複数スレッドから同時に matches を呼び出せる。
    """

    source: str
    root: BooleanExpression

    @classmethod
    def compile(cls, query: str) -> "QueryMatcher":
        """検索式をトークン化・パースして QueryMatcher を生成する

        不正な検索式の場合は ParseError のサブクラスを送出する。
        """
        return cls(source=query, root=parse_boolean_expression(query))

    def matches(self, text: str) -> bool:
        """テキストが検索式を満たすか判定する"""
        return evaluate(self.root, text)

    def __call__(self, text: str) -> bool:
        return self.matches(text)


def compile_query(query: str) -> QueryMatcher:
    return QueryMatcher.compile(query)
