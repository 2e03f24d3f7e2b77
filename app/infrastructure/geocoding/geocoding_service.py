import asyncio
import json
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
from loguru import logger

from app.domain.constants.sources import (REVERSE_GEOCODER_TIMEOUT,
                                          REVERSE_GEOCODER_URL)


@dataclass(frozen=True)
class GsiAddress:
    """逆ジオコーダの results を表すデータクラス"""
    muni_cd: str  # 市区町村コード
    lv01_nm: Optional[str]  # 町字名


@dataclass(frozen=True)
class ReverseGeocodeResult:
    """逆ジオコーダのレスポンスを表すデータクラス（該当なしの場合 address は None）"""
    address: Optional[GsiAddress]

    @classmethod
    def from_json(cls, payload: Any) -> "ReverseGeocodeResult":
        if not isinstance(payload, dict):
            return cls(address=None)
        results = payload.get("results")
        if not isinstance(results, dict) or results.get("muniCd") is None:
            return cls(address=None)
        return cls(
            address=GsiAddress(
                muni_cd=str(results["muniCd"]),
                lv01_nm=results.get("lv01Nm")
            )
        )


class GeocodingService:
    url: str
    timeout: aiohttp.ClientTimeout

    def __init__(self, url: str = REVERSE_GEOCODER_URL, timeout: float = REVERSE_GEOCODER_TIMEOUT):
        """
        国土地理院の逆ジオコーダを使用して市区町村コードを取得するサービス

        Args:
            url (str): 逆ジオコーダのURL
            timeout (float): タイムアウト（秒）
        """
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def reverse_geocode(self, latitude: str, longitude: str) -> ReverseGeocodeResult:
        """
        緯度経度から逆ジオコーダの結果を取得する
        通信エラーや不正なレスポンスの場合も該当なしとして扱う

        Args:
            latitude (str): 緯度
            longitude (str): 経度

        Returns:
            ReverseGeocodeResult: 逆ジオコーダの結果
        """
        params = {"lat": latitude, "lon": longitude}
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(self.url, params=params) as response:
                    payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"逆ジオコーダの呼び出しに失敗しました: ({latitude}, {longitude}), {e}")
            return ReverseGeocodeResult(address=None)
        except ValueError as e:
            logger.error(f"逆ジオコーダのレスポンスを解釈できませんでした: ({latitude}, {longitude}), {e}")
            return ReverseGeocodeResult(address=None)

        logger.debug(
            f"Reverse geocoder response: {json.dumps(payload, ensure_ascii=False)}")
        return ReverseGeocodeResult.from_json(payload)

    async def resolve(self, latitude: str, longitude: str) -> int:
        """
        緯度経度から市区町村コードを取得する

        Args:
            latitude (str): 緯度
            longitude (str): 経度

        Returns:
            int: 市区町村コード。取得できない場合は 0
        """
        result = await self.reverse_geocode(latitude, longitude)
        if result.address is None:
            logger.warning(f"市区町村が見つかりませんでした: ({latitude}, {longitude})")
            return 0

        try:
            return int(result.address.muni_cd)
        except ValueError:
            logger.warning(f"市区町村コードを解釈できませんでした: {result.address.muni_cd}")
            return 0


# シングルトンパターンを実装
_geocoding_service_instance = None


def get_geocoding_service() -> GeocodingService:
    """GeocodingServiceのインスタンスを取得する"""
    global _geocoding_service_instance
    if _geocoding_service_instance is None:
        _geocoding_service_instance = GeocodingService()
    return _geocoding_service_instance
