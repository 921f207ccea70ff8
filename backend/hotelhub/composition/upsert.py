"""
子资源 upsert 执行器
按父 ID 查找单例子记录：存在则部分更新，不存在则插入
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.composition.projector import FieldSpec
from hotelhub.database import Base
from hotelhub.errors import ParentNotFound, StorageFailure, UniqueConflict

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "unique"
FOREIGN_KEY_VIOLATION = "foreign_key"
OTHER_VIOLATION = "other"


@dataclass(frozen=True)
class TableDescriptor:
    """子资源表描述

    Attributes:
        model: ORM 模型
        parent_column: 指向父表的外键列
        parent_kind: 父实体名称（Hotel / Room / Event），用于错误信息
        fields: 该表接受的字段声明
        label: 批量条目的可读名称（集合表使用）
        discriminator: 批量条目必填的判别字段（集合表使用）
    """
    model: Type[Base]
    parent_column: str
    parent_kind: str
    fields: Tuple[FieldSpec, ...] = ()
    label: Optional[str] = None
    discriminator: Optional[str] = None

    @property
    def table_name(self) -> str:
        return self.model.__tablename__


def classify_integrity_error(exc: IntegrityError) -> str:
    """区分唯一约束冲突和外键冲突

    PostgreSQL 驱动带 SQLSTATE，SQLite 只能看错误文本
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == "23505":
        return UNIQUE_VIOLATION
    if code == "23503":
        return FOREIGN_KEY_VIOLATION
    text = str(orig).upper()
    if "FOREIGN KEY" in text:
        return FOREIGN_KEY_VIOLATION
    if "UNIQUE" in text or "DUPLICATE" in text:
        return UNIQUE_VIOLATION
    return OTHER_VIOLATION


def row_to_dict(row) -> Dict[str, Any]:
    """ORM 行转字典（全部列）"""
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def find_for_parent(db: Session, descriptor: TableDescriptor, parent_id: int):
    model = descriptor.model
    return db.query(model).filter(getattr(model, descriptor.parent_column) == parent_id).first()


def upsert(
    db: Session,
    parent_id: int,
    descriptor: TableDescriptor,
    fields: Mapping[str, Any],
):
    """更新或插入单例子记录

    Returns:
        写入后的行；fields 为空时返回 None 且不访问数据库

    Raises:
        ParentNotFound: 外键冲突（父记录不存在或已被并发删除）
        UniqueConflict: 插入撞上唯一约束且重试更新时记录仍不存在
        StorageFailure: 其他持久化错误
    """
    if not fields:
        return None

    existing = find_for_parent(db, descriptor, parent_id)
    if existing is not None:
        return _apply(db, descriptor, existing, fields)

    row = descriptor.model(**{descriptor.parent_column: parent_id}, **fields)
    try:
        with db.begin_nested():
            db.add(row)
            db.flush()
    except IntegrityError as exc:
        violation = classify_integrity_error(exc)
        if violation == FOREIGN_KEY_VIOLATION:
            raise ParentNotFound(descriptor.parent_kind, parent_id) from exc
        if violation != UNIQUE_VIOLATION:
            raise StorageFailure(descriptor.table_name, str(exc.orig)) from exc

        # 并发请求先插入了同一父记录的行，改为更新
        logger.warning("%s 插入冲突 (parent=%s)，重试为更新", descriptor.table_name, parent_id)
        existing = find_for_parent(db, descriptor, parent_id)
        if existing is None:
            raise UniqueConflict(descriptor.table_name, parent_id) from exc
        return _apply(db, descriptor, existing, fields)
    except SQLAlchemyError as exc:
        raise StorageFailure(descriptor.table_name, str(exc)) from exc

    return row


def _apply(db: Session, descriptor: TableDescriptor, row, fields: Mapping[str, Any]):
    """部分更新：只改传入的列"""
    for key, value in fields.items():
        setattr(row, key, value)
    try:
        db.flush()
    except SQLAlchemyError as exc:
        raise StorageFailure(descriptor.table_name, str(exc)) from exc
    return row
