from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root():
    """死活監視用のエンドポイント（テキストを返す）"""
    return "JMA area API is running."


@router.get("/ping", status_code=200)
async def ping():
    """ヘルスチェック用のエンドポイント"""
    return {}
