"""菜单管理相关的路由定义。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.system.api.v1.schemas.menus import (
    MenuCreateRequest,
    MenuListResponse,
    MenuMutationResponse,
    MenuPermissionListResponse,
    MenuUpdateRequest,
)
from app.packages.system.core.dependencies import get_db
from app.packages.system.core.logger import logger
from app.packages.system.services.menu_service import menu_service

router = APIRouter(prefix="/menus", tags=["menus"])


@router.post("", response_model=MenuMutationResponse)
def create_menu(
    payload: MenuCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> MenuMutationResponse:
    """创建菜单及其接口权限。"""
    body = payload.model_dump()
    return _run_mutation(request, "create", lambda: menu_service.create(db, payload=body))


@router.get("/all", response_model=MenuListResponse)
def list_menus(
    has_button: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> MenuListResponse:
    """返回全部菜单，``has_button`` 为假时不含按钮。"""
    return menu_service.list_menus(db, has_button=has_button)


@router.get("/buttons", response_model=MenuListResponse)
def list_buttons(
    parent_id: int = Query(..., ge=0),
    db: Session = Depends(get_db),
) -> MenuListResponse:
    """返回指定父级下的全部子节点。"""
    return menu_service.list_buttons(db, parent_id=parent_id)


@router.get("/permissions", response_model=MenuPermissionListResponse)
def list_menu_permissions(
    menu_id: int = Query(..., ge=1),
    db: Session = Depends(get_db),
) -> MenuPermissionListResponse:
    """返回菜单关联的接口权限。"""
    return menu_service.list_permissions(db, menu_id=menu_id)


@router.put("/{menu_id}", response_model=MenuMutationResponse)
def update_menu(
    menu_id: int,
    payload: MenuUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> MenuMutationResponse:
    """更新菜单字段并整体替换其接口权限。"""
    body = payload.model_dump(exclude_unset=True)
    return _run_mutation(
        request,
        "update",
        lambda: menu_service.update(db, menu_id=menu_id, payload=body),
    )


@router.delete("/{menu_id}", response_model=MenuMutationResponse)
def delete_menu(
    menu_id: int,
    request: Request,
    db: Session = Depends(get_db),
) -> MenuMutationResponse:
    """删除菜单及其接口权限。"""
    return _run_mutation(request, "delete", lambda: menu_service.delete(db, menu_id=menu_id))


def _run_mutation(request: Request, business_type: str, action: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    """执行写操作，并在结束时记录耗时与结果。"""

    started_at = datetime.now(timezone.utc)
    status = "success"
    error_message: Optional[str] = None
    try:
        return action()
    except Exception as exc:
        status = "failure"
        error_message = str(exc)
        raise
    finally:
        cost_ms = max(int((datetime.now(timezone.utc) - started_at).total_seconds() * 1000), 0)
        logger.info(
            "Menu %s %s %s: status=%s cost_ms=%d error=%s",
            business_type,
            request.method,
            _build_request_uri(request),
            status,
            cost_ms,
            error_message,
        )


def _build_request_uri(request: Request) -> str:
    path = request.url.path
    query = request.url.query
    if query:
        return f"{path}?{query}"
    return path
