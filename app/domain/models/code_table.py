from dataclasses import dataclass, field
from typing import Optional, Sequence

from app.domain.models.code_info import CodeInfo


def search_muni_codes(muni_codes: Sequence[int], code: int) -> int:
    """
    昇順に並んだ市区町村コード列を二分探索する

    一致するコードがあればその位置を返す。
    一致しない場合は対象より小さい最大の要素の位置を返す
    （すべての要素より小さい場合は -1）。

    Args:
        muni_codes (Sequence[int]): 昇順の市区町村コード列
        code (int): 探索するコード

    Returns:
        int: 一致した位置、または直前の要素の位置
    """
    left = 0
    right = len(muni_codes) - 1
    while left <= right:
        mid = (left + right) // 2
        if code < muni_codes[mid]:
            right = mid - 1
        elif code > muni_codes[mid]:
            left = mid + 1
        else:
            return mid
    return left - 1


@dataclass(frozen=True)
class CodeTable:
    """市区町村コード表（起動時に一度だけ構築され、以降は読み取り専用）"""
    code_info: tuple[CodeInfo, ...] = field(default_factory=tuple)
    muni_codes: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.code_info) != len(self.muni_codes):
            raise ValueError("code_info と muni_codes の件数が一致しません")

    @classmethod
    def from_entries(cls, entries: Sequence[CodeInfo]) -> "CodeTable":
        """CodeInfo の列からコード表を作成する"""
        return cls(
            code_info=tuple(entries),
            muni_codes=tuple(entry.code for entry in entries)
        )

    def __len__(self) -> int:
        return len(self.muni_codes)

    def search(self, code: int) -> int:
        return search_muni_codes(self.muni_codes, code)

    def find(self, code: int) -> Optional[CodeInfo]:
        """
        市区町村コードに完全一致するエントリを取得する

        Args:
            code (int): 市区町村コード

        Returns:
            Optional[CodeInfo]: 一致したエントリ。存在しない場合は None
        """
        index = self.search(code)
        if index < 0 or self.muni_codes[index] != code:
            return None
        return self.code_info[index]
