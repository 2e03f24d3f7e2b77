from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.jma_area.get_jma_area import \
    get_jma_area as get_jma_area_app
from app.domain.models.code_table import CodeTable
from app.domain.services.code_table_service import get_code_table
from app.infrastructure.geocoding.geocoding_service import (
    GeocodingService, get_geocoding_service)
from app.interfaces.schemas.jma_area import JmaAreaResponse

router = APIRouter()


@router.get(
    "/jma_area",
    response_model=JmaAreaResponse,
    response_model_exclude_none=True
)
async def get_jma_area(
    latitude: Optional[str] = Query(
        None,
        description="緯度"
    ),
    longitude: Optional[str] = Query(
        None,
        description="経度"
    ),
    code_table: Optional[CodeTable] = Depends(get_code_table),
    geocoding_service: GeocodingService = Depends(get_geocoding_service)
):
    """
    緯度経度から市区町村名と気象庁の区域コードを取得する。

    失敗した場合もステータスは200で、success=false とエラー内容を返す。
    """
    return await get_jma_area_app(
        code_table=code_table,
        geocoding_service=geocoding_service,
        latitude=latitude,
        longitude=longitude
    )
