"""菜单与菜单接口权限的业务逻辑封装。"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.packages.system.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
    MENU_PERMISSION_METHODS,
    NON_NULLABLE_MENU_FIELDS,
    ROOT_MENU_PARENT_ID,
)
from app.packages.system.core.enums import NAVIGATION_MENU_TYPES, ErrorCodeEnum, MenuTypeEnum
from app.packages.system.core.exceptions import AppException
from app.packages.system.core.logger import logger
from app.packages.system.core.responses import create_response
from app.packages.system.crud.menu_permissions import menu_permission_crud
from app.packages.system.crud.menus import menu_crud
from app.packages.system.db.session import unit_of_work
from app.packages.system.models.menu import Menu, MenuPermission

# 可写入 menus 表的字段白名单，请求体中的其它键（例如 menu_perm_list）一律忽略
MENU_COLUMNS = (
    "parent_id",
    "name",
    "code",
    "type",
    "icon",
    "route_path",
    "component_path",
    "sort_order",
    "is_external",
    "keep_alive",
    "remark",
)
_OPTIONAL_TEXT_COLUMNS = frozenset({"code", "icon", "route_path", "component_path", "remark"})
# 创建时显式传入 null 的这些字段交给模型默认值处理
_MODEL_DEFAULT_COLUMNS = frozenset({"sort_order", "is_external", "keep_alive"})

MSG_PARENT_NOT_FOUND = "当前父级菜单不存在，请调整后重新添加"
MSG_MENU_NOT_FOUND = "当前菜单不存在或已删除"


def build_menu_values(payload: Mapping[str, Any], *, partial: bool = False) -> Dict[str, Any]:
    """把请求字段映射为 ``Menu`` 的列值，只保留白名单中出现过的字段。

    ``partial`` 为真时按局部更新处理：不可为空的字段显式传入 ``None`` 会被拒绝，
    而不是像创建时那样回落到默认值。
    """
    values: Dict[str, Any] = {}
    for column in MENU_COLUMNS:
        if column not in payload:
            continue
        value = payload[column]
        if value is None and column in NON_NULLABLE_MENU_FIELDS:
            if partial:
                raise AppException(f"菜单字段 {column} 不能为空", HTTP_STATUS_BAD_REQUEST)
            if column in _MODEL_DEFAULT_COLUMNS:
                continue
        if column == "type":
            value = _normalize_menu_type(value)
        elif column == "name":
            value = _normalize_name(value)
        elif column == "parent_id":
            value = _normalize_parent_id(value)
        elif column in _OPTIONAL_TEXT_COLUMNS:
            value = _normalize_optional_text(value)
        elif column in {"is_external", "keep_alive"}:
            value = bool(value)
        values[column] = value
    return values


def build_permission_values(menu_id: int, permissions: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """为每条接口权限补齐所属菜单 ID，并规范化地址与请求方法。"""
    rows: List[Dict[str, Any]] = []
    for permission in permissions:
        api_url = _normalize_optional_text(permission.get("api_url"))
        if not api_url:
            raise AppException("接口地址必填", HTTP_STATUS_BAD_REQUEST)
        rows.append(
            {
                "menu_id": menu_id,
                "api_url": api_url,
                "api_method": _normalize_api_method(permission.get("api_method")),
            }
        )
    return rows


class MenuService:
    """聚合菜单及其接口权限的增删改查逻辑。

    菜单与接口权限总是一起写入：创建时同时插入，更新时整体替换权限列表，
    删除时先删权限再删菜单，每次操作都在同一个 ``unit_of_work`` 内完成。
    """

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict[str, Any]:
        """创建菜单及其接口权限，非顶层菜单需要父级存在。"""

        parent_id = _normalize_parent_id(payload.get("parent_id"))
        if parent_id != ROOT_MENU_PARENT_ID and menu_crud.get(db, parent_id) is None:
            logger.warning("Menu creation rejected: parent %s not found", parent_id)
            raise AppException(MSG_PARENT_NOT_FOUND, ErrorCodeEnum.PARENT_NOT_FOUND, status_code=HTTP_STATUS_NOT_FOUND)

        menu_values = build_menu_values({**payload, "parent_id": parent_id})
        permissions = payload.get("menu_perm_list") or []

        with unit_of_work(db):
            menu = menu_crud.create(db, menu_values, auto_commit=False)
            if menu.id is None:
                raise AppException(
                    "菜单创建失败，请稍后重试",
                    ErrorCodeEnum.SERVICE_ERROR,
                    status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
                )
            menu_id = menu.id
            menu_permission_crud.create_multi(
                db,
                build_permission_values(menu_id, permissions),
                auto_commit=False,
            )

        logger.info("Menu %s created with %d api permissions", menu_id, len(permissions))
        return create_response("创建菜单成功", None, HTTP_STATUS_OK)

    def list_menus(self, db: Session, *, has_button: bool) -> dict[str, Any]:
        """返回菜单列表；``has_button`` 为假时排除按钮类型。"""

        if has_button:
            menus = menu_crud.list_all(db)
        else:
            menus = menu_crud.list_by_types(db, NAVIGATION_MENU_TYPES)
        data = [self._serialize_menu(menu) for menu in menus]
        return create_response("获取菜单列表成功", data, HTTP_STATUS_OK)

    def list_buttons(self, db: Session, *, parent_id: int) -> dict[str, Any]:
        """返回指定父级下的所有子节点。"""

        children = menu_crud.list_by_parent(db, parent_id)
        data = [self._serialize_menu(menu) for menu in children]
        return create_response("获取按钮列表成功", data, HTTP_STATUS_OK)

    def list_permissions(self, db: Session, *, menu_id: int) -> dict[str, Any]:
        permissions = menu_permission_crud.list_by_menu(db, menu_id)
        data = [self._serialize_permission(item) for item in permissions]
        return create_response("获取菜单接口权限成功", data, HTTP_STATUS_OK)

    def delete(self, db: Session, *, menu_id: int) -> dict[str, Any]:
        """删除菜单及其全部接口权限。

        子菜单不会被级联删除，其 ``parent_id`` 仍指向已删除的节点。
        """

        if not menu_crud.exists(db, menu_id):
            logger.warning("Menu deletion rejected: menu %s not found", menu_id)
            raise AppException(MSG_MENU_NOT_FOUND, ErrorCodeEnum.MENU_NOT_FOUND, status_code=HTTP_STATUS_NOT_FOUND)

        with unit_of_work(db):
            removed = menu_permission_crud.delete_by_menu(db, menu_id, auto_commit=False)
            affected = menu_crud.delete_by_id(db, menu_id, auto_commit=False)
            if not affected:
                raise AppException(
                    "菜单删除失败，请稍后重试",
                    ErrorCodeEnum.SERVICE_ERROR,
                    status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
                )

        logger.info("Menu %s deleted together with %d api permissions", menu_id, removed)
        return create_response("删除菜单成功", None, HTTP_STATUS_OK)

    def update(self, db: Session, *, menu_id: int, payload: Dict[str, Any]) -> dict[str, Any]:
        """更新菜单字段，并用新的接口权限列表整体替换旧列表。"""

        if not menu_crud.exists(db, menu_id):
            logger.warning("Menu update rejected: menu %s not found", menu_id)
            raise AppException(MSG_MENU_NOT_FOUND, ErrorCodeEnum.MENU_NOT_FOUND, status_code=HTTP_STATUS_NOT_FOUND)

        menu_values = build_menu_values(payload, partial=True)
        permission_rows = build_permission_values(menu_id, payload.get("menu_perm_list") or [])

        with unit_of_work(db):
            menu_permission_crud.delete_by_menu(db, menu_id, auto_commit=False)
            menu_permission_crud.create_multi(db, permission_rows, auto_commit=False)
            affected = menu_crud.update_by_id(db, menu_id, menu_values, auto_commit=False)
            if not affected:
                raise AppException(
                    "当前菜单更新失败，请稍后重试",
                    ErrorCodeEnum.SERVICE_ERROR,
                    status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
                )

        logger.info("Menu %s updated, api permissions replaced with %d entries", menu_id, len(permission_rows))
        return create_response("更新菜单成功", None, HTTP_STATUS_OK)

    def _serialize_menu(self, menu: Menu) -> Dict[str, Any]:
        return {
            "id": menu.id,
            "parent_id": menu.parent_id,
            "name": menu.name,
            "code": menu.code,
            "type": menu.type,
            "icon": menu.icon,
            "route_path": menu.route_path,
            "component_path": menu.component_path,
            "sort_order": menu.sort_order,
            "is_external": bool(menu.is_external),
            "keep_alive": bool(menu.keep_alive),
            "remark": menu.remark,
            "create_time": menu.create_time,
            "update_time": menu.update_time,
        }

    def _serialize_permission(self, permission: MenuPermission) -> Dict[str, Any]:
        return {
            "id": permission.id,
            "menu_id": permission.menu_id,
            "api_url": permission.api_url,
            "api_method": permission.api_method,
        }


def _normalize_parent_id(parent_id: Optional[Any]) -> int:
    if parent_id in (None, "", "0"):
        return ROOT_MENU_PARENT_ID
    try:
        return int(parent_id)
    except (TypeError, ValueError) as exc:
        raise AppException("父级菜单标识无效", HTTP_STATUS_BAD_REQUEST) from exc


def _normalize_menu_type(node_type: Optional[Any]) -> str:
    if isinstance(node_type, Enum):
        node_type = node_type.value
    if node_type is None:
        return MenuTypeEnum.MENU.value
    normalized = str(node_type).strip().lower()
    try:
        return MenuTypeEnum(normalized).value
    except ValueError as exc:
        raise AppException("菜单类型无效", HTTP_STATUS_BAD_REQUEST) from exc


def _normalize_name(name: Optional[str]) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise AppException("菜单名称必填", HTTP_STATUS_BAD_REQUEST)
    return normalized


def _normalize_optional_text(value: Optional[Any]) -> Optional[str]:
    if value is None:
        return None
    normalized = str(value).strip()
    return normalized or None


def _normalize_api_method(api_method: Optional[Any]) -> str:
    normalized = str(api_method or "").strip().upper()
    if normalized not in MENU_PERMISSION_METHODS:
        raise AppException("接口请求方法无效", HTTP_STATUS_BAD_REQUEST)
    return normalized


menu_service = MenuService()
