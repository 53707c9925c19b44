from dataclasses import dataclass
from typing import Iterable

from tqdm import tqdm

from config_manager import FilterConfig
from query_errors import ParseError
from query_matcher import QueryMatcher


@dataclass(frozen=True)
class FilterMatch:
    """フィルタで選択された1行"""

    line_number: int
    text: str
    filters: tuple[str, ...]


class TextFilter:
    """名前付きの検索式を多数のテキストに適用するクラス"""

    def __init__(self, filters: dict[str, QueryMatcher]):
        self.filters = filters

    @classmethod
    def from_configs(cls, configs: Iterable[FilterConfig]) -> "TextFilter":
        """設定からフィルタを生成する（検索式はここで一度だけコンパイルする）"""
        filters: dict[str, QueryMatcher] = {}
        for config in configs:
            if config.name in filters:
                raise ValueError(f"フィルタ名 '{config.name}' が重複しています")
            try:
                filters[config.name] = QueryMatcher.compile(config.query)
            except ParseError as e:
                raise ValueError(f"フィルタ '{config.name}' の検索式が不正です: {e}") from e
        return cls(filters)

    def route(self, text: str) -> list[str]:
        """テキストに一致するフィルタ名を設定順に返す"""
        return [name for name, matcher in self.filters.items() if matcher.matches(text)]

    def filter_lines(
        self, lines: Iterable[str], invert: bool = False, progress: bool = False
    ) -> list[FilterMatch]:
        """いずれかのフィルタに一致する行を抽出する

        invert が真の場合はどのフィルタにも一致しない行を抽出する。
        """
        selected: list[FilterMatch] = []

        for line_number, line in enumerate(
            tqdm(lines, desc="行を処理中", unit="line", disable=not progress), 1
        ):
            text = line.rstrip("\r\n")
            names = self.route(text)
            if bool(names) != invert:
                selected.append(FilterMatch(line_number, text, tuple(names)))

        return selected
