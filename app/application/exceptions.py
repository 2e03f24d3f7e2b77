from dataclasses import dataclass
from typing import Any


@dataclass
class ApplicationError(Exception):
    """アプリケーション層の基底例外クラス"""
    reason: str
    error_code: int = 200
    status: int = 200
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.reason


class MissingCoordinatesError(ApplicationError):
    """緯度または経度が指定されていない場合の例外"""

    def __init__(self, param_name: str | None = None):
        super().__init__(
            reason="Latitude or longitude is missing.",
            error_code=201,
            details={"param": param_name} if param_name else None
        )


class AreaCodeNotResolvedError(ApplicationError):
    """緯度経度から市区町村コードを取得できない場合の例外"""

    def __init__(self, latitude: str, longitude: str):
        super().__init__(
            reason="Could not get area code.",
            error_code=202,
            details={"latitude": latitude, "longitude": longitude}
        )


class MunicipalityNotInTableError(ApplicationError):
    """市区町村コードがコード表に存在しない場合の例外"""

    def __init__(self, municipality_code: int):
        super().__init__(
            reason="Area code is not in the code table.",
            error_code=203,
            details={"municipality_code": municipality_code}
        )


class CodeTableNotReadyError(ApplicationError):
    """市区町村コード表が構築されていない場合の例外"""

    def __init__(self):
        super().__init__(
            reason="Code table is not ready.",
            error_code=204
        )
