"""Knuth-Morris-Pratt法による部分文字列検索

キーワードごとの失敗テーブルを一度だけ構築しておき、
テキストを後戻りせずに線形時間で走査する。
比較は大文字小文字を区別しない（両方を小文字化してから比較する）。
"""


def build_failure_table(needle: str) -> tuple[int, ...]:
    """キーワードの失敗テーブルを構築する

    table[i] は needle[0..i] の真の接頭辞かつ接尾辞である最長の文字列の
    長さから1を引いた値で、不一致時に比較を再開するインデックスを表す。
    table[0] は常に -1。空のキーワードには空のテーブルを返す。
    """
    if not needle:
        return ()

    table = [0] * len(needle)
    table[0] = -1
    j = -1

    for i in range(1, len(needle)):
        while j > -1 and needle[j + 1] != needle[i]:
            j = table[j]
        if needle[j + 1] == needle[i]:
            j += 1
        table[i] = j

    return tuple(table)


def search(needle: str, table: tuple[int, ...], haystack: str) -> bool:
    """構築済みのテーブルを使って needle が haystack に含まれるか判定する

    needle と haystack は呼び出し側で小文字化済みであること。
    """
    if not needle:
        return True

    last = len(needle) - 1
    j = -1

    for char in haystack:
        while j > -1 and needle[j + 1] != char:
            j = table[j]
        if needle[j + 1] == char:
            j += 1
        if j == last:
            return True

    return False


def contains(needle: str, haystack: str) -> bool:
    """needle が haystack の部分文字列かどうかを大文字小文字を区別せずに判定する"""
    needle = needle.lower()
    return search(needle, build_failure_table(needle), haystack.lower())
