"""
集合子资源批量追加
整批校验通过后才写入，任一条目不合法则一条都不写
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.composition.projector import project
from hotelhub.composition.upsert import (
    FOREIGN_KEY_VIOLATION, TableDescriptor, classify_integrity_error,
)
from hotelhub.errors import (
    InvalidBatchShape, MissingDiscriminator, ParentNotFound, StorageFailure,
)

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def prepare_items(items: Any, descriptor: TableDescriptor) -> List[Dict[str, Any]]:
    """校验批量形状和判别字段，并逐条投影

    Raises:
        InvalidBatchShape: items 不是非空列表
        MissingDiscriminator: 某条目不是对象或缺少判别字段
        InvalidFieldType: 某条目字段类型错误（错误信息带条目序号）
    """
    if not isinstance(items, list) or not items:
        raise InvalidBatchShape(descriptor.label)

    prepared = []
    for index, item in enumerate(items):
        if not isinstance(item, dict) or _is_blank(item.get(descriptor.discriminator)):
            raise MissingDiscriminator(descriptor.label, descriptor.discriminator, index, item)
        fields = project(item, descriptor.fields, index=index)
        if _is_blank(fields.get(descriptor.discriminator)):
            raise MissingDiscriminator(descriptor.label, descriptor.discriminator, index, item)
        prepared.append(fields)
    return prepared


def insert_prepared(
    db: Session,
    parent_id: int,
    prepared: List[Dict[str, Any]],
    descriptor: TableDescriptor,
) -> list:
    """按输入顺序插入已校验的条目，返回带生成 ID 的行"""
    rows = [
        descriptor.model(**{descriptor.parent_column: parent_id}, **fields)
        for fields in prepared
    ]
    try:
        with db.begin_nested():
            for row in rows:
                db.add(row)
                # 逐条 flush，保证 ID 与输入顺序一致
                db.flush()
    except IntegrityError as exc:
        if classify_integrity_error(exc) == FOREIGN_KEY_VIOLATION:
            raise ParentNotFound(descriptor.parent_kind, parent_id) from exc
        raise StorageFailure(descriptor.table_name, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise StorageFailure(descriptor.table_name, str(exc)) from exc

    logger.debug("%s 追加 %d 条 (parent=%s)", descriptor.table_name, len(rows), parent_id)
    return rows


def append_all(db: Session, parent_id: int, items: Any, descriptor: TableDescriptor) -> list:
    """批量追加集合子记录，调用方需先确认父记录存在"""
    prepared = prepare_items(items, descriptor)
    return insert_prepared(db, parent_id, prepared, descriptor)
