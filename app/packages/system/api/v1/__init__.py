"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.system.api.v1.endpoints import menus

api_router = APIRouter()
api_router.include_router(menus.router)
