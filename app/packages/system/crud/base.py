"""CRUD 基类：为各实体提供通用的数据访问方法。"""

from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from app.packages.system.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、写入与删除逻辑。

    写操作都接受 ``auto_commit``：在 ``unit_of_work`` 中组合多步写入时传入
    ``False``，由外层统一提交或回滚。
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def query(self, db: Session) -> Query:
        return db.query(self.model)

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return self.query(db).filter(self.model.id == id).first()

    def exists(self, db: Session, id: Any) -> bool:
        return self.query(db).with_entities(self.model.id).filter(self.model.id == id).first() is not None

    def list_by(self, db: Session, **filters: Any) -> List[ModelType]:
        """按字段等值条件返回记录，结果按主键排序。"""
        query = self.query(db).filter_by(**filters)
        return query.order_by(self.model.id).all()

    def create(self, db: Session, obj_in: Dict[str, Any], *, auto_commit: bool = True) -> ModelType:
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        if auto_commit:
            db.commit()
            db.refresh(db_obj)
        else:
            # 刷新到数据库以获得自增主键，供同一事务内的后续写入引用
            db.flush()
        return db_obj

    def create_multi(
        self,
        db: Session,
        objs_in: Iterable[Dict[str, Any]],
        *,
        auto_commit: bool = True,
    ) -> List[ModelType]:
        db_objs = [self.model(**obj_in) for obj_in in objs_in]
        if not db_objs:
            return db_objs
        db.add_all(db_objs)
        if auto_commit:
            db.commit()
        else:
            db.flush()
        return db_objs

    def update_by_id(
        self,
        db: Session,
        id: Any,
        values: Dict[str, Any],
        *,
        auto_commit: bool = True,
    ) -> int:
        """按主键批量更新字段，返回受影响的行数。"""
        if not values:
            # 没有可更新的列时仍需确认目标行存在
            return 1 if self.exists(db, id) else 0
        affected = (
            self.query(db)
            .filter(self.model.id == id)
            .update(values, synchronize_session="fetch")
        )
        if auto_commit:
            db.commit()
        return affected

    def delete_where(self, db: Session, *, auto_commit: bool = True, **filters: Any) -> int:
        """按字段等值条件物理删除记录，返回删除的行数。"""
        affected = self.query(db).filter_by(**filters).delete(synchronize_session="fetch")
        if auto_commit:
            db.commit()
        return affected

    def delete_by_id(self, db: Session, id: Any, *, auto_commit: bool = True) -> int:
        return self.delete_where(db, auto_commit=auto_commit, id=id)
