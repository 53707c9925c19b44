import sys
from pathlib import Path
from typing import List, Tuple

import click

from config_manager import ConfigManager, FilterConfig
from text_filter import FilterMatch, TextFilter

DEFAULT_CONFIG = "filters.yaml"


def load_filter_configs(queries: Tuple[str, ...], config: str) -> List[FilterConfig]:
    """コマンドラインの検索式と設定ファイルのフィルタをまとめて返す"""
    configs = [FilterConfig(name=query, query=query) for query in queries]

    # 既定の設定ファイルは存在する場合のみ読み込む
    if config != DEFAULT_CONFIG or Path(config).exists():
        try:
            configs.extend(ConfigManager(config).get_filters())
        except (FileNotFoundError, ValueError) as e:
            print(f"❌ 設定エラー: {e}", file=sys.stderr)
            raise

    if not configs:
        message = "検索式が指定されていません (--query または --config を指定してください)"
        print(f"❌ {message}", file=sys.stderr)
        raise ValueError(message)

    return configs


def initialize_filter(configs: List[FilterConfig]) -> TextFilter:
    """フィルタを初期化する（検索式のコンパイル）"""
    try:
        return TextFilter.from_configs(configs)
    except ValueError as e:
        print(f"❌ 検索式エラー: {e}", file=sys.stderr)
        raise


def print_startup_info(configs: List[FilterConfig], file_count: int, invert: bool):
    """起動時の情報を表示"""
    print(f"🔍 {len(configs)}個のフィルタを {file_count}個の入力に適用します", file=sys.stderr)
    for config in configs:
        print(f"  - {config.name}: {config.query}", file=sys.stderr)
    if invert:
        print("🔁 反転モード: どのフィルタにも一致しない行を表示します", file=sys.stderr)


def print_parsed_filters(text_filter: TextFilter):
    """パース結果の構文木を表示"""
    for name, matcher in text_filter.filters.items():
        print(f"✅ {name}: {matcher.root!r}")


def print_matches(
    matches: List[FilterMatch], prefix: str, line_number: bool, verbose: bool
):
    """選択された行を表示"""
    for match in matches:
        head = prefix
        if line_number:
            head += f"{match.line_number}:"
        print(f"{head}{match.text}")
        if verbose and match.filters:
            print(f"    ↳ {', '.join(match.filters)}", file=sys.stderr)


def print_summary(total: int, verbose: bool):
    """処理完了後のサマリーを表示"""
    if verbose:
        print(f"{'=' * 60}", file=sys.stderr)
        print(f"🎉 処理完了！合計 {total} 行が一致しました", file=sys.stderr)
        print(f"{'=' * 60}", file=sys.stderr)


@click.command()
@click.argument("files", nargs=-1, type=click.File("r", encoding="utf-8"))
@click.option(
    "--query",
    "-q",
    "queries",
    multiple=True,
    help="Boolean query to apply, e.g. '(\"this\" | \"that\") & !\"those\"'. Repeatable.",
)
@click.option(
    "--config",
    "-c",
    default=DEFAULT_CONFIG,
    help=f"Path to a YAML file with named filters (default: {DEFAULT_CONFIG}, used only if present).",
)
@click.option(
    "--invert",
    "-i",
    is_flag=True,
    help="Select lines that match none of the filters.",
)
@click.option(
    "--count",
    is_flag=True,
    help="Print only the number of selected lines per input.",
)
@click.option(
    "--line-number",
    "-n",
    is_flag=True,
    help="Prefix each selected line with its line number.",
)
@click.option(
    "--progress",
    is_flag=True,
    help="Show a progress bar while reading input.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Only validate the queries and print their parsed form.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with the matching filter names.",
)
def main(
    files, queries, config, invert, count, line_number, progress, check, verbose
):
    """ブール検索式でテキストの行を抽出するツールのメインエントリーポイント"""
    try:
        configs = load_filter_configs(queries, config)
        text_filter = initialize_filter(configs)
    except (FileNotFoundError, ValueError):
        # エラーは既にprint済み
        sys.exit(2)

    if check:
        print_parsed_filters(text_filter)
        sys.exit(0)

    inputs = list(files) or [click.get_text_stream("stdin")]
    if verbose:
        print_startup_info(configs, len(inputs), invert)

    total = 0
    try:
        for stream in inputs:
            matches = text_filter.filter_lines(stream, invert=invert, progress=progress)
            total += len(matches)

            prefix = f"{stream.name}:" if len(inputs) > 1 else ""
            if count:
                print(f"{prefix}{len(matches)}")
            else:
                print_matches(matches, prefix, line_number, verbose)
    except KeyboardInterrupt:
        print("\n⚠️  処理が中断されました", file=sys.stderr)
        sys.exit(130)
    except UnicodeDecodeError as e:
        print(f"❌ 入力の読み込みエラー ({stream.name}): {e}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print(f"❌ 予期しないエラーが発生しました: {e}", file=sys.stderr)
        sys.exit(2)

    print_summary(total, verbose)
    sys.exit(0 if total else 1)


if __name__ == "__main__":
    main()
