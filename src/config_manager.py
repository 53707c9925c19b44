from dataclasses import dataclass
from typing import Any

import yaml


@dataclass
class FilterConfig:
    """名前付きフィルタの設定を表すデータクラス"""

    name: str
    query: str


class ConfigManager:
    """設定ファイルの読み込みと管理を担当するクラス"""

    def __init__(self, config_path: str):
        self.config_path = config_path
        self._config_data = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """設定ファイルを読み込む"""
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                data = yaml.safe_load(file)
        except FileNotFoundError:
            raise FileNotFoundError(f"設定ファイルが見つかりません: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"設定ファイルの形式が正しくありません: {e}")

        if not isinstance(data, dict):
            raise ValueError("設定ファイルの形式が正しくありません: マッピングが必要です")
        return data

    def get_filters(self) -> list[FilterConfig]:
        """フィルタのリストを取得"""
        try:
            filters_data = self._config_data["filters"]
        except KeyError:
            raise ValueError("filters 設定が見つかりません")

        if not isinstance(filters_data, list):
            raise ValueError("filters 設定はリストである必要があります")

        filters = []
        for i, filter_data in enumerate(filters_data, 1):
            try:
                query = filter_data["query"]
            except (KeyError, TypeError) as e:
                raise ValueError(f"フィルタ {i} の設定が不足しています: {e}")

            if not isinstance(query, str):
                raise ValueError(f"フィルタ {i} の query は文字列である必要があります")

            filters.append(
                FilterConfig(name=str(filter_data.get("name", f"Filter {i}")), query=query)
            )

        return filters
