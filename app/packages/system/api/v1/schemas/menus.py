"""菜单管理相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.packages.system.api.v1.schemas.common import ResponseEnvelope
from app.packages.system.core.constants import (
    MENU_PERMISSION_METHODS,
    NON_NULLABLE_MENU_FIELDS,
    ROOT_MENU_PARENT_ID,
)
from app.packages.system.core.enums import MenuTypeEnum


class MenuPermissionItem(BaseModel):
    """菜单关联的单条接口权限。"""

    api_url: str = Field(..., min_length=1, max_length=255)
    api_method: str = Field(..., min_length=1)

    @field_validator("api_method")
    @classmethod
    def validate_api_method(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in MENU_PERMISSION_METHODS:
            raise ValueError("接口请求方法无效")
        return normalized


class MenuCreateRequest(BaseModel):
    """新建菜单时的请求体，``menu_perm_list`` 不落入菜单表。"""

    parent_id: int = Field(default=ROOT_MENU_PARENT_ID, ge=0)
    name: str = Field(..., min_length=1, max_length=100)
    code: Optional[str] = Field(default=None, max_length=100)
    type: MenuTypeEnum = MenuTypeEnum.MENU
    icon: Optional[str] = None
    route_path: Optional[str] = None
    component_path: Optional[str] = None
    sort_order: int = Field(default=0, ge=0)
    is_external: bool = False
    keep_alive: bool = False
    remark: Optional[str] = None
    menu_perm_list: list[MenuPermissionItem] = Field(default_factory=list)


class MenuUpdateRequest(BaseModel):
    """更新菜单时的请求体，未提供的字段保持原值，接口权限总是整体替换。"""

    parent_id: Optional[int] = Field(default=None, ge=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    code: Optional[str] = Field(default=None, max_length=100)
    type: Optional[MenuTypeEnum] = None
    icon: Optional[str] = None
    route_path: Optional[str] = None
    component_path: Optional[str] = None
    sort_order: Optional[int] = Field(default=None, ge=0)
    is_external: Optional[bool] = None
    keep_alive: Optional[bool] = None
    remark: Optional[str] = None
    menu_perm_list: list[MenuPermissionItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "MenuUpdateRequest":
        nulled = sorted(
            field
            for field in NON_NULLABLE_MENU_FIELDS
            if field in self.model_fields_set and getattr(self, field) is None
        )
        if nulled:
            raise ValueError(f"以下字段不能为空：{', '.join(nulled)}")
        return self


class MenuItem(BaseModel):
    id: int
    parent_id: int
    name: str
    code: Optional[str]
    type: MenuTypeEnum
    icon: Optional[str]
    route_path: Optional[str]
    component_path: Optional[str]
    sort_order: int
    is_external: bool
    keep_alive: bool
    remark: Optional[str]
    create_time: datetime
    update_time: datetime


class MenuPermissionDetail(BaseModel):
    id: int
    menu_id: int
    api_url: str
    api_method: str


MenuListResponse = ResponseEnvelope[list[MenuItem]]
MenuPermissionListResponse = ResponseEnvelope[list[MenuPermissionDetail]]
MenuMutationResponse = ResponseEnvelope[None]
