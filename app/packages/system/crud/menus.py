"""菜单的数据库访问封装。"""

from typing import Collection, List

from sqlalchemy.orm import Session

from app.packages.system.crud.base import CRUDBase
from app.packages.system.models.menu import Menu


class CRUDMenu(CRUDBase[Menu]):
    """提供菜单树相关的便捷查询方法。"""

    def list_all(self, db: Session) -> List[Menu]:
        """返回全部菜单，按照排序值与主键排序。"""
        return self.query(db).order_by(self.model.sort_order, self.model.id).all()

    def list_by_types(self, db: Session, types: Collection[str]) -> List[Menu]:
        """仅返回类型位于给定集合内的菜单。"""
        if not types:
            return []
        query = self.query(db).filter(self.model.type.in_(list(types)))
        return query.order_by(self.model.sort_order, self.model.id).all()

    def list_by_parent(self, db: Session, parent_id: int) -> List[Menu]:
        """返回指定父级下的全部直接子节点，不区分类型。"""
        query = self.query(db).filter(self.model.parent_id == parent_id)
        return query.order_by(self.model.sort_order, self.model.id).all()


menu_crud = CRUDMenu(Menu)
