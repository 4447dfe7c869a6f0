"""Database bootstrapping utilities."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.system.core.config import get_settings
from app.packages.system.core.constants import ROOT_MENU_PARENT_ID
from app.packages.system.core.enums import MenuTypeEnum
from app.packages.system.db import session as db_session
from app.packages.system.models.base import Base
from app.packages.system.models.menu import Menu, MenuPermission

logger = logging.getLogger(__name__)

# 默认菜单树：系统管理 > 菜单管理 > 增删改按钮，每个节点附带其调用的接口
DEFAULT_MENU_TREE: list[dict[str, Any]] = [
    {
        "name": "系统管理",
        "code": "system",
        "type": MenuTypeEnum.DIRECTORY.value,
        "icon": "setting",
        "route_path": "/system",
        "sort_order": 1,
        "permissions": [],
        "children": [
            {
                "name": "菜单管理",
                "code": "system:menu",
                "type": MenuTypeEnum.MENU.value,
                "icon": "tree-table",
                "route_path": "menu",
                "component_path": "system/menu/index",
                "sort_order": 1,
                "permissions": [
                    ("/api/v1/menus/all", "GET"),
                    ("/api/v1/menus/buttons", "GET"),
                    ("/api/v1/menus/permissions", "GET"),
                ],
                "children": [
                    {
                        "name": "新增菜单",
                        "code": "system:menu:create",
                        "type": MenuTypeEnum.BUTTON.value,
                        "sort_order": 1,
                        "permissions": [("/api/v1/menus", "POST")],
                    },
                    {
                        "name": "编辑菜单",
                        "code": "system:menu:update",
                        "type": MenuTypeEnum.BUTTON.value,
                        "sort_order": 2,
                        "permissions": [("/api/v1/menus/{menu_id}", "PUT")],
                    },
                    {
                        "name": "删除菜单",
                        "code": "system:menu:delete",
                        "type": MenuTypeEnum.BUTTON.value,
                        "sort_order": 3,
                        "permissions": [("/api/v1/menus/{menu_id}", "DELETE")],
                    },
                ],
            },
        ],
    },
]


def init_db() -> None:
    """Create all database tables if they do not exist and seed the default menu tree."""
    Base.metadata.create_all(bind=db_session.engine)

    if not get_settings().seed_default_menus:
        return

    session = db_session.SessionLocal()
    try:
        _seed_default_menus(session)
        session.commit()
    except Exception:  # pragma: no cover - surfaced to the startup hook
        session.rollback()
        logger.exception("Failed to seed default menus during database initialization")
        raise
    finally:
        session.close()


def _seed_default_menus(db: Session) -> None:
    """仅在菜单表为空时写入默认菜单树，避免覆盖用户自定义数据。"""
    if db.query(Menu.id).first() is not None:
        return

    count = 0
    pending = [(ROOT_MENU_PARENT_ID, node) for node in DEFAULT_MENU_TREE]
    while pending:
        parent_id, node = pending.pop(0)
        menu = Menu(
            parent_id=parent_id,
            name=node["name"],
            code=node.get("code"),
            type=node["type"],
            icon=node.get("icon"),
            route_path=node.get("route_path"),
            component_path=node.get("component_path"),
            sort_order=node.get("sort_order", 0),
        )
        db.add(menu)
        db.flush()
        db.add_all(
            MenuPermission(menu_id=menu.id, api_url=api_url, api_method=api_method)
            for api_url, api_method in node["permissions"]
        )
        pending.extend((menu.id, child) for child in node.get("children", []))
        count += 1

    db.flush()
    logger.info("Seeded %d default menu entries", count)
