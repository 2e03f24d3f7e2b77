from typing import Any, Optional

from pydantic import BaseModel, Field


class CodeInfoResponse(BaseModel):
    code: int = Field(..., description="市区町村コード（検査数字を除く）")
    pref: str = Field(..., description="都道府県名")
    city: str = Field(..., description="市区町村名")
    office_code: Optional[int] = Field(
        None, description="気象庁 府県予報区コード（offices）")
    class10s_code: Optional[int] = Field(
        None, description="気象庁 一次細分区域コード（class10s）")

    class Config:
        from_attributes = True


class JmaAreaResponse(BaseModel):
    success: bool = Field(True, description="成功したかどうか")
    code: CodeInfoResponse = Field(..., description="市区町村と気象庁の区域コード")


class JmaAreaErrorResponse(BaseModel):
    success: bool = Field(False, description="成功したかどうか")
    error: str = Field(..., description="エラー内容")
    error_code: int = Field(..., description="エラーコード")
    details: Optional[dict[str, Any]] = Field(None, description="エラーの詳細")
