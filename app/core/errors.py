# app/core/errors.py
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from loguru import logger

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Starlette 預設訊息 -> 對外固定字串
_HTTP_MESSAGES = {
    405: "Method not allowed",
    404: "Not found",
}


class ApiError(Exception):
    """
    對外錯誤：輸出 {"error": <error>, **extra}。
    extra 用來帶 raw / message 等除錯欄位。
    """

    def __init__(self, status_code: int, error: str, **extra: Any) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.extra = extra

    def to_content(self) -> dict:
        return {"error": self.error, **self.extra}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning("{} {} -> {} {}", request.method, request.url.path, exc.status_code, exc.error)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        # 統一輸出格式
        message = _HTTP_MESSAGES.get(exc.status_code, exc.detail)
        logger.warning("{} {} -> {} {}", request.method, request.url.path, exc.status_code, message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        # body 不是 JSON 物件 / 型別錯 -> 400，保持資訊節制
        errors = jsonable_errors(exc)
        logger.warning("{} {} -> 400 Invalid request body {}", request.method, request.url.path, errors)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "errors": errors},
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    # pydantic v2 的 ctx 可能含 Exception 物件，無法直接序列化
    out = []
    for err in exc.errors():
        out.append({k: v for k, v in err.items() if k in ("type", "loc", "msg")})
    return out


def register_cors(app: FastAPI) -> None:
    @app.middleware("http")
    async def permissive_cors(request: Request, call_next):
        # 所有端點：OPTIONS 一律 204（preflight，不驗證身分）
        if request.method == "OPTIONS":
            resp = Response(status_code=204)
        else:
            resp = await call_next(request)
        resp.headers.update(CORS_HEADERS)
        resp.headers["X-Content-Type-Options"] = "nosniff"
        return resp
