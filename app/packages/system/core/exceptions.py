"""异常处理模块：定义统一的业务异常与响应格式。"""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.system.core.constants import HTTP_STATUS_INTERNAL_SERVER_ERROR
from app.packages.system.core.logger import logger
from app.packages.system.core.responses import create_response


class AppException(HTTPException):
    """携带业务错误码的异常，由全局处理器转换为统一响应结构。

    ``code`` 写入响应体；``status_code`` 为 HTTP 状态码，缺省时与 ``code`` 相同，
    因此只在 ``code`` 不是合法 HTTP 状态码（例如六位业务码）时需要显式传入。
    """

    def __init__(
        self,
        msg: str,
        code: int = status.HTTP_400_BAD_REQUEST,
        *,
        status_code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(status_code=status_code or int(code), detail=msg)
        self.code = int(code)
        self.data = data


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 ``HTTPException`` 与 ``AppException`` 转换为统一响应格式。"""
    code = getattr(exc, "code", exc.status_code)
    payload = create_response(str(exc.detail), getattr(exc, "data", None), code)
    return JSONResponse(status_code=exc.status_code, content=payload)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：记录异常堆栈，并返回标准的 500 响应结构。"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    payload = create_response("服务器内部错误", None, HTTP_STATUS_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR, content=payload)
