from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CodeInfo:
    code: int  # 市区町村コード（検査数字を除いた値）
    pref: str  # 都道府県名
    city: str  # 市区町村名
    office_code: Optional[int] = None  # 気象庁 府県予報区（offices）コード
    class10s_code: Optional[int] = None  # 気象庁 一次細分区域（class10s）コード
