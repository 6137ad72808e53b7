# app/shared/schemas/common.py
from pydantic import BaseModel


class BaseResponse(BaseModel):
    success: bool
    message: str = ""


class ErrorResponse(BaseModel):
    error: str
