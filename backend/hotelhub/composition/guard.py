"""
父记录存在性校验
"""
from typing import Any, Type

from sqlalchemy.orm import Session

from hotelhub.database import Base
from hotelhub.errors import ParentNotFound


def ensure_exists(db: Session, model: Type[Base], parent_id: Any, entity_kind: str):
    """确认父记录存在，否则抛出 ParentNotFound；只读，返回父记录"""
    if parent_id is None:
        raise ParentNotFound(entity_kind, parent_id)
    parent = db.query(model).filter(model.id == parent_id).first()
    if parent is None:
        raise ParentNotFound(entity_kind, parent_id)
    return parent
