import asyncio
from typing import Any

import aiohttp
from loguru import logger

from app.domain.constants.sources import SOURCE_FETCH_TIMEOUT


class UpstreamFetchError(Exception):
    """外部データソースの取得に失敗した場合の例外"""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url} の取得に失敗しました: {message}")
        self.url = url


class SourceClient:
    """起動時に読み込む外部データソースを取得するクライアント"""
    timeout: aiohttp.ClientTimeout

    def __init__(self, timeout: float = SOURCE_FETCH_TIMEOUT):
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def fetch_bytes(self, url: str) -> bytes:
        """
        URLからバイナリを取得する

        Args:
            url (str): 取得先URL

        Returns:
            bytes: レスポンスボディ

        Raises:
            UpstreamFetchError: 通信エラー、または2xx以外のステータスの場合
        """
        logger.info(f"外部データを取得します: {url}")
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    if response.status < 200 or response.status >= 300:
                        logger.error(
                            f"外部データの取得がエラーを返しました: ステータス {response.status}, {url}")
                        raise UpstreamFetchError(
                            url, f"ステータス {response.status}")
                    return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"外部データの取得に失敗しました: {url}, {e}")
            raise UpstreamFetchError(url, str(e)) from e

    async def fetch_json(self, url: str) -> Any:
        """
        URLからJSONを取得する

        Raises:
            UpstreamFetchError: 取得できない、またはJSONとして解釈できない場合
        """
        logger.info(f"外部データを取得します: {url}")
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    if response.status < 200 or response.status >= 300:
                        logger.error(
                            f"外部データの取得がエラーを返しました: ステータス {response.status}, {url}")
                        raise UpstreamFetchError(
                            url, f"ステータス {response.status}")
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"外部データの取得に失敗しました: {url}, {e}")
            raise UpstreamFetchError(url, str(e)) from e
