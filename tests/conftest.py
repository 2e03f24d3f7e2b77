from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.domain.models.code_info import CodeInfo
from app.domain.models.code_table import CodeTable
from app.domain.services.code_table_service import get_code_table
from app.infrastructure.geocoding.geocoding_service import (
    GeocodingService, get_geocoding_service)
from main import app


@pytest.fixture
def code_table() -> CodeTable:
    """テスト用の市区町村コード表（千代田区はインデックス5）"""
    return CodeTable.from_entries([
        CodeInfo(code=11002, pref="北海道", city="札幌市"),
        CodeInfo(code=12025, pref="青森県", city="青森市"),
        CodeInfo(code=22021, pref="宮城県", city="仙台市"),
        CodeInfo(code=40002, pref="千葉県", city="千葉市"),
        CodeInfo(code=100005, pref="東京都", city="特別区部"),
        CodeInfo(code=131016, pref="東京都", city="千代田区"),
        CodeInfo(code=131024, pref="東京都", city="中央区"),
        CodeInfo(code=472018, pref="沖縄県", city="那覇市"),
    ])


@pytest.fixture
def area_hierarchy() -> dict:
    """テスト用の気象庁 area.json（千代田区と中央区のみ）"""
    return {
        "centers": {"010300": {"name": "関東甲信地方", "children": ["130000"]}},
        "offices": {"130000": {"name": "東京都", "parent": "010300", "children": ["130010"]}},
        "class10s": {
            "130010": {"name": "東京地方", "parent": "130000", "children": ["130011"]},
            "131011": {"name": "東京地方", "parent": "130000", "children": ["1310115"]},
        },
        "class15s": {
            "1310115": {"name": "２３区西部", "parent": "131011", "children": ["13101600"]},
            "1310200": {"name": "２３区東部", "parent": "130010", "children": ["1310200"]},
        },
        "class20s": {
            "13101600": {"name": "千代田区", "parent": "1310115"},
            "1310200": {"name": "中央区", "parent": "1310200"},
        },
    }


@pytest.fixture
def mock_geocoding_service():
    """モック化されたGeocodingService"""
    return AsyncMock(spec=GeocodingService)


@pytest.fixture
def client(code_table, mock_geocoding_service):
    """
    テスト用のFastAPIクライアント
    コード表と逆ジオコーダを依存性注入
    """
    app.dependency_overrides[get_code_table] = lambda: code_table
    app.dependency_overrides[get_geocoding_service] = lambda: mock_geocoding_service
    yield TestClient(app)
    app.dependency_overrides.clear()
