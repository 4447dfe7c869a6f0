"""菜单接口权限的数据库访问封装。"""

from typing import List

from sqlalchemy.orm import Session

from app.packages.system.crud.base import CRUDBase
from app.packages.system.models.menu import MenuPermission


class CRUDMenuPermission(CRUDBase[MenuPermission]):
    def list_by_menu(self, db: Session, menu_id: int) -> List[MenuPermission]:
        return self.list_by(db, menu_id=menu_id)

    def delete_by_menu(self, db: Session, menu_id: int, *, auto_commit: bool = True) -> int:
        """删除菜单下的全部接口权限，返回删除的行数。"""
        return self.delete_where(db, auto_commit=auto_commit, menu_id=menu_id)


menu_permission_crud = CRUDMenuPermission(MenuPermission)
