import html

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.application.exceptions import ApplicationError
from app.interfaces.schemas.jma_area import JmaAreaErrorResponse


def register_error_handlers(app: FastAPI) -> None:
    """
    FastAPIアプリケーションにエラーハンドラを登録する。

    Args:
        app (FastAPI): FastAPIアプリケーションインスタンス
    """
    @app.exception_handler(ApplicationError)
    async def application_error_handler(
        request: Request,
        exc: ApplicationError
    ) -> JSONResponse:
        """
        アプリケーション層の例外を success=false のレスポンスに変換する。

        Args:
            request (Request): リクエストオブジェクト
            exc (ApplicationError): アプリケーション層の例外

        Returns:
            JSONResponse: エラーレスポンス
        """
        logger.info(f"リクエストに失敗しました: {exc.reason} ({request.url.path})")

        details = None
        if exc.details:
            # HTML特殊文字をエスケープ
            details = {k: html.escape(v) if isinstance(v, str) else v
                       for k, v in exc.details.items()}

        error_response = JmaAreaErrorResponse(
            success=False,
            error=exc.reason,
            error_code=exc.error_code,
            details=details
        )

        return JSONResponse(
            status_code=exc.status,
            content=error_response.model_dump(exclude_none=True)
        )
