import os
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.domain.services.code_table_service import initialize_code_table
from app.interfaces.api import jma_area, ping
from app.interfaces.api.error_handlers import register_error_handlers

load_dotenv()
STAGE = os.getenv("stage", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # リクエストを受け付ける前に市区町村コード表を構築する
    # 取得に失敗した場合は起動を中止する
    code_table = await initialize_code_table()
    logger.info(f"市区町村コード表を構築しました: {len(code_table)}件")
    yield


app = FastAPI(
    title="気象庁区域コードAPI",
    description="""
    緯度経度から市区町村名と気象庁の区域コードを取得するAPI。

    ## 主な機能

    * 国土地理院の逆ジオコーダによる市区町村コードの特定
    * 総務省の全国地方公共団体コードと気象庁の予報区の対応付け
    """,
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "jma_area",
            "description": "気象庁の区域コードに関するエンドポイント."
        },
        {
            "name": "ping",
            "description": "死活監視用のエンドポイント."
        }
    ]
)

# エラーハンドラの登録
register_error_handlers(app)

if STAGE == "dev":
    # CORS設定
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r'.*',  # すべてのドメインを許可（セキュリティ上非推奨）
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

# ルーターの登録
app.include_router(ping.router, tags=["ping"])
app.include_router(jma_area.router, tags=["jma_area"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
