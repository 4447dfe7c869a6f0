"""菜单模型：描述导航菜单、按钮节点及其关联的接口权限。"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.system.core.constants import ROOT_MENU_PARENT_ID
from app.packages.system.core.enums import MenuTypeEnum
from app.packages.system.models.base import Base, TimestampMixin


class Menu(TimestampMixin, Base):
    """菜单树节点，``parent_id`` 为 0 时表示顶层节点。

    父子关系只在应用层维护，数据库不建立外键，删除父级不会级联处理子级。
    """

    __tablename__ = "menus"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    parent_id: Mapped[int] = mapped_column(Integer, index=True, default=ROOT_MENU_PARENT_ID)
    name: Mapped[str] = mapped_column(String(100), index=True)
    code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    type: Mapped[str] = mapped_column(String(20), index=True, default=MenuTypeEnum.MENU.value)
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    route_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    component_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    is_external: Mapped[bool] = mapped_column(Boolean, default=False)
    keep_alive: Mapped[bool] = mapped_column(Boolean, default=False)
    remark: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class MenuPermission(TimestampMixin, Base):
    """菜单对应的接口权限，每条记录只属于一个菜单。"""

    __tablename__ = "menu_permissions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    menu_id: Mapped[int] = mapped_column(Integer, index=True)
    api_url: Mapped[str] = mapped_column(String(255))
    api_method: Mapped[str] = mapped_column(String(10))
