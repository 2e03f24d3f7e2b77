import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from app.infrastructure.geocoding.geocoding_service import (
    GeocodingService, GsiAddress, ReverseGeocodeResult)

SESSION_PATH = "app.infrastructure.geocoding.geocoding_service.aiohttp.ClientSession"


@pytest.mark.unit
class TestReverseGeocodeResult:
    def test_from_json_with_results(self):
        """results がある場合は住所情報を持つことを確認"""
        result = ReverseGeocodeResult.from_json(
            {"results": {"muniCd": "13101", "lv01Nm": "丸の内一丁目"}})
        assert result.address == GsiAddress(muni_cd="13101", lv01_nm="丸の内一丁目")

    def test_from_json_without_results(self):
        """results がない場合は該当なしとなることを確認"""
        assert ReverseGeocodeResult.from_json({}).address is None

    def test_from_json_without_muni_cd(self):
        assert ReverseGeocodeResult.from_json({"results": {"lv01Nm": "－"}}).address is None

    def test_from_json_not_object(self):
        assert ReverseGeocodeResult.from_json(None).address is None
        assert ReverseGeocodeResult.from_json([]).address is None


@pytest.mark.unit
class TestGeocodingService:
    @pytest.fixture
    def service(self):
        return GeocodingService(url="https://example.com/reverse", timeout=1)

    @pytest.fixture
    def mock_session_cls(self):
        """aiohttp.ClientSession をモック化し、レスポンスを差し替えられるようにする"""
        with patch(SESSION_PATH) as session_cls:
            session = MagicMock()
            response = MagicMock()
            response.json = AsyncMock()
            session_cls.return_value.__aenter__.return_value = session
            session.get.return_value.__aenter__.return_value = response
            yield session_cls

    def _response(self, session_cls):
        session = session_cls.return_value.__aenter__.return_value
        return session.get.return_value.__aenter__.return_value

    @pytest.mark.asyncio
    async def test_resolve_success(self, service, mock_session_cls):
        """正常系: 緯度経度から市区町村コードを取得できることを確認"""
        self._response(mock_session_cls).json.return_value = {
            "results": {"muniCd": "131016", "lv01Nm": "丸の内一丁目"}}

        result = await service.resolve("35.681236", "139.767125")

        assert result == 131016
        session = mock_session_cls.return_value.__aenter__.return_value
        session.get.assert_called_once_with(
            "https://example.com/reverse",
            params={"lat": "35.681236", "lon": "139.767125"})

    @pytest.mark.asyncio
    async def test_resolve_no_results(self, service, mock_session_cls):
        """異常系: results がない場合（海上など）は0を返すことを確認"""
        self._response(mock_session_cls).json.return_value = {}

        assert await service.resolve("30.0", "140.0") == 0

    @pytest.mark.asyncio
    async def test_resolve_invalid_muni_cd(self, service, mock_session_cls):
        self._response(mock_session_cls).json.return_value = {
            "results": {"muniCd": "abc", "lv01Nm": "－"}}

        assert await service.resolve("35.0", "139.0") == 0

    @pytest.mark.asyncio
    async def test_resolve_malformed_json(self, service, mock_session_cls):
        """異常系: JSONとして解釈できない場合は0を返すことを確認"""
        self._response(mock_session_cls).json.side_effect = json.JSONDecodeError(
            "Expecting value", "<html>", 0)

        assert await service.resolve("35.0", "139.0") == 0

    @pytest.mark.asyncio
    async def test_resolve_connection_error(self, service, mock_session_cls):
        """異常系: 通信エラーの場合は0を返すことを確認"""
        mock_session_cls.return_value.__aenter__.side_effect = aiohttp.ClientConnectionError(
            "connection refused")

        assert await service.resolve("35.0", "139.0") == 0

    @pytest.mark.asyncio
    async def test_resolve_timeout(self, service, mock_session_cls):
        """異常系: タイムアウトの場合は0を返すことを確認"""
        self._response(mock_session_cls).json.side_effect = asyncio.TimeoutError()

        assert await service.resolve("35.0", "139.0") == 0
