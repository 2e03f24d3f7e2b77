"""市区町村コード表に関するサービス"""
import io
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from loguru import logger
from openpyxl import load_workbook

from app.domain.constants.sources import (DEFAULT_WORKSHEET_NAME,
                                          JMA_AREA_URL,
                                          MUNICIPALITY_XLSX_URL,
                                          RESOLVE_JMA_HIERARCHY,
                                          WORKSHEET_NAME_MARKER)
from app.domain.models.code_info import CodeInfo
from app.domain.models.code_table import CodeTable
from app.infrastructure.sources.source_client import SourceClient


class WorksheetNotFoundError(ValueError):
    """市区町村コードのシートが見つからない場合の例外"""

    def __init__(self, sheet_name: str):
        super().__init__(f"シートが見つかりません: {sheet_name}")
        self.sheet_name = sheet_name


def select_worksheet_name(sheet_names: Sequence[str]) -> str:
    """
    「現在」を含む最初のシート名を返す。見つからない場合は既定のシート名を返す
    """
    for name in sheet_names:
        if WORKSHEET_NAME_MARKER in name:
            return name
    return DEFAULT_WORKSHEET_NAME


def _normalize_code_cell(value: Any) -> Optional[str]:
    """団体コードのセル値を文字列に揃える。数値として解釈できない場合は None"""
    if value is None:
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int):
        # 数値のセルは先頭の0が失われるため6桁に揃える
        return str(value).zfill(6)
    code = str(value).strip()
    if not code.isdigit():
        return None
    return code


def resolve_jma_codes(area_hierarchy: Mapping[str, Any], code: str) -> Optional[tuple[int, int]]:
    """
    市区町村コードから気象庁の一次細分区域コードと府県予報区コードを求める

    市区町村コードに "00" を付けた class20s のコードから、
    class15s → class10s → offices の順に parent をたどる。

    Args:
        area_hierarchy (Mapping[str, Any]): 気象庁 area.json の内容
        code (str): 市区町村コード（検査数字を除いた値）

    Returns:
        Optional[tuple[int, int]]: (class10sコード, officesコード)。
            どこかの段階で見つからない場合は None
    """
    class20 = area_hierarchy.get("class20s", {}).get(code + "00")
    if not class20:
        return None
    class15 = area_hierarchy.get("class15s", {}).get(class20.get("parent"))
    if not class15:
        return None
    class10s_code = class15.get("parent")
    class10 = area_hierarchy.get("class10s", {}).get(class10s_code)
    if not class10 or not class10.get("parent"):
        return None
    return int(class10s_code), int(class10["parent"])


def build_code_table(
    rows: Iterable[Sequence[Any]],
    area_hierarchy: Optional[Mapping[str, Any]] = None
) -> CodeTable:
    """
    シートの行データから市区町村コード表を構築する

    1行目は見出しとして読み飛ばす。末尾が "000" のコード（都道府県）は除外する。
    area_hierarchy が指定された場合は気象庁の区域コードを付与し、
    区域をたどれない市区町村は表から除外する。

    Args:
        rows (Iterable[Sequence[Any]]): シートの行（セル値の配列）
        area_hierarchy (Optional[Mapping[str, Any]]): 気象庁 area.json の内容

    Returns:
        CodeTable: 市区町村コード表
    """
    entries: List[CodeInfo] = []
    dropped = 0
    for i, row in enumerate(rows):
        if i == 0:
            continue
        if not row:
            continue

        raw_code = _normalize_code_cell(row[0])
        if raw_code is None or len(raw_code) < 2:
            logger.warning(f"団体コードを解釈できない行を読み飛ばしました: {list(row)}")
            continue

        # 末尾の検査数字を除く
        code = raw_code[:-1]
        if code.endswith("000"):
            continue

        pref = row[1] if len(row) > 1 else None
        city = row[2] if len(row) > 2 else None

        office_code = None
        class10s_code = None
        if area_hierarchy is not None:
            resolved = resolve_jma_codes(area_hierarchy, code)
            if resolved is None:
                logger.debug(f"気象庁の区域が見つからないため除外しました: {code} {pref}{city}")
                dropped += 1
                continue
            class10s_code, office_code = resolved

        if entries and int(code) <= entries[-1].code:
            logger.warning(f"団体コードが昇順に並んでいません: {entries[-1].code} -> {code}")

        entries.append(
            CodeInfo(
                code=int(code),
                pref=str(pref or ""),
                city=str(city or ""),
                office_code=office_code,
                class10s_code=class10s_code
            )
        )

    if dropped:
        logger.info(f"{dropped}件の市区町村を気象庁の区域が見つからないため除外しました")
    logger.info(f"{len(entries)}件の市区町村コードを読み込みました")
    return CodeTable.from_entries(entries)


def read_workbook_rows(content: bytes) -> List[tuple]:
    """xlsxのバイナリから対象シートの全行を読み出す"""
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet_name = select_worksheet_name(workbook.sheetnames)
        if sheet_name not in workbook.sheetnames:
            raise WorksheetNotFoundError(sheet_name)
        logger.info(f"シート「{sheet_name}」を読み込みます")
        worksheet = workbook[sheet_name]
        return list(worksheet.iter_rows(values_only=True))
    finally:
        workbook.close()


class CodeTableBuilder:
    """外部データソースから市区町村コード表を構築するクラス"""
    source_client: SourceClient

    def __init__(
        self,
        source_client: Optional[SourceClient] = None,
        xlsx_url: str = MUNICIPALITY_XLSX_URL,
        area_url: str = JMA_AREA_URL,
        resolve_hierarchy: bool = RESOLVE_JMA_HIERARCHY,
    ):
        self.source_client = source_client or SourceClient()
        self.xlsx_url = xlsx_url
        self.area_url = area_url
        self.resolve_hierarchy = resolve_hierarchy

    async def build(self) -> CodeTable:
        """
        市区町村コードのxlsxと気象庁の区域階層を取得し、コード表を構築する

        Raises:
            UpstreamFetchError: データソースの取得に失敗した場合
            WorksheetNotFoundError: 対象シートが存在しない場合
        """
        content = await self.source_client.fetch_bytes(self.xlsx_url)
        rows = read_workbook_rows(content)

        area_hierarchy = None
        if self.resolve_hierarchy:
            area_hierarchy = await self.source_client.fetch_json(self.area_url)

        return build_code_table(rows, area_hierarchy)


# 起動時に一度だけ構築する
_code_table_instance: Optional[CodeTable] = None


async def initialize_code_table(builder: Optional[CodeTableBuilder] = None) -> CodeTable:
    """
    市区町村コード表を構築して保持する
    アプリケーションの起動時にリクエストを受け付ける前に呼び出します
    """
    global _code_table_instance
    if _code_table_instance is None:
        _code_table_instance = await (builder or CodeTableBuilder()).build()
    return _code_table_instance


def get_code_table() -> Optional[CodeTable]:
    """
    構築済みの市区町村コード表を取得する
    未構築の場合は None を返します
    """
    return _code_table_instance
