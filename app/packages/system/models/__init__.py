"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.system.models.menu import Menu, MenuPermission

__all__ = [
    "Menu",
    "MenuPermission",
]
