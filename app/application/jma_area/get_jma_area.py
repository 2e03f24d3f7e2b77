from typing import Optional

from loguru import logger

from app.application.exceptions import (AreaCodeNotResolvedError,
                                        CodeTableNotReadyError,
                                        MissingCoordinatesError,
                                        MunicipalityNotInTableError)
from app.domain.models.code_table import CodeTable
from app.infrastructure.geocoding.geocoding_service import GeocodingService
from app.interfaces.schemas.jma_area import CodeInfoResponse, JmaAreaResponse


async def get_jma_area(
    code_table: Optional[CodeTable],
    geocoding_service: GeocodingService,
    latitude: Optional[str],
    longitude: Optional[str],
) -> JmaAreaResponse:
    """
    緯度経度から市区町村と気象庁の区域コードを取得する。

    Args:
        code_table (Optional[CodeTable]): 市区町村コード表
        geocoding_service (GeocodingService): 逆ジオコーダ
        latitude (Optional[str]): 緯度
        longitude (Optional[str]): 経度

    Returns:
        JmaAreaResponse: 市区町村情報
    """
    if not latitude or not longitude:
        raise MissingCoordinatesError(
            param_name="latitude" if not latitude else "longitude")

    if code_table is None:
        raise CodeTableNotReadyError()

    logger.info(f"区域コードの取得開始: 位置=({latitude}, {longitude})")

    muni_code = await geocoding_service.resolve(latitude, longitude)
    if muni_code == 0:
        raise AreaCodeNotResolvedError(latitude=latitude, longitude=longitude)

    code_info = code_table.find(muni_code)
    if code_info is None:
        # 二分探索は直前の要素を返すため、完全一致しない場合はエラーとする
        logger.warning(f"コード表に存在しない市区町村コードです: {muni_code}")
        raise MunicipalityNotInTableError(municipality_code=muni_code)

    logger.info(f"区域コードの取得完了: {code_info.pref}{code_info.city}")

    return JmaAreaResponse(
        success=True,
        code=CodeInfoResponse.model_validate(code_info)
    )
