"""系统业务包：提供菜单及其接口权限的管理能力。"""

from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db

__all__ = [
    "api_router",
    "create_response",
    "generic_exception_handler",
    "get_settings",
    "http_exception_handler",
    "init_db",
    "logger",
    "setup_logging",
]
