"""
聚合组合器

一次请求体描述一个完整的领域对象（酒店 / 房间配置 / 活动），
组合器先写父记录，再按静态字段表把同一请求体拆分到各个子表：
单例子表走 upsert，集合子表合成单元素批次后走批量追加。

事务由调用方（服务层）负责：组合器只 flush，不 commit。
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.composition.appender import insert_prepared, prepare_items
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.projector import FieldSpec, present_subset, project
from hotelhub.composition.upsert import (
    FOREIGN_KEY_VIOLATION, TableDescriptor, classify_integrity_error, find_for_parent,
    row_to_dict, upsert,
)
from hotelhub.database import Base
from hotelhub.errors import (
    MissingRequiredField, NoValidFields, ParentNotFound, StorageFailure,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionSpec:
    """平铺在请求体中的集合子资源

    unwrap 为 True 时写入响应里返回单行而不是列表；读取时统一用 list_key 返回列表
    """
    key: str
    descriptor: TableDescriptor
    unwrap: bool = False
    read_key: Optional[str] = None

    @property
    def list_key(self) -> str:
        return self.read_key or self.key


@dataclass(frozen=True)
class AggregateSpec:
    """一个聚合的静态字段表"""
    key: str
    parent_model: Type[Base]
    parent_kind: str
    parent_fields: Tuple[FieldSpec, ...]
    required: Tuple[str, ...] = ()
    # 外键字段 -> (被引用模型, 实体名)
    references: Dict[str, Tuple[Type[Base], str]] = field(default_factory=dict)
    singletons: Tuple[Tuple[str, TableDescriptor], ...] = ()
    collections: Tuple[CollectionSpec, ...] = ()

    def __post_init__(self):
        self.validate()

    def all_field_specs(self) -> List[FieldSpec]:
        specs = list(self.parent_fields)
        for _, descriptor in self.singletons:
            specs.extend(descriptor.fields)
        for collection in self.collections:
            specs.extend(collection.descriptor.fields)
        return specs

    def validate(self):
        """同一聚合内一个输入键只能映射到一个子资源"""
        seen = {}
        for spec in self.all_field_specs():
            for key in spec.input_keys:
                if key in seen:
                    raise ValueError(
                        f"聚合 {self.key} 字段重复声明: {key} ({seen[key]} / {spec.name})"
                    )
                seen[key] = spec.name
        keys = [k for k, _ in self.singletons] + [c.key for c in self.collections]
        if len(keys) != len(set(keys)):
            raise ValueError(f"聚合 {self.key} 子资源键重复: {keys}")


@dataclass
class _Plan:
    """写入前完成全部校验后的待写内容"""
    parent_fields: Dict[str, Any]
    singletons: List[Tuple[str, TableDescriptor, Dict[str, Any]]]
    collections: List[Tuple[CollectionSpec, List[Dict[str, Any]]]]

    def has_children(self) -> bool:
        return bool(self.singletons or self.collections)


class AggregateComposer:
    """聚合组合器"""

    def __init__(self, db: Session, spec: AggregateSpec):
        self.db = db
        self.spec = spec

    # ============== 对外接口 ==============

    def compose_create(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """创建父记录及请求体中出现的全部子资源"""
        plan = self._plan(payload)
        for name in self.spec.required:
            if name not in plan.parent_fields:
                raise MissingRequiredField(name)
        self._check_references(plan.parent_fields)

        parent = self.spec.parent_model(**plan.parent_fields)
        self.db.add(parent)
        self._flush_parent(plan.parent_fields)

        logger.info("创建 %s id=%s", self.spec.parent_kind, parent.id)
        return self._write_children(parent, plan)

    def compose_update(self, parent_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """部分更新已有父记录，并对子资源执行同样的拆分写入"""
        parent = ensure_exists(self.db, self.spec.parent_model, parent_id, self.spec.parent_kind)
        plan = self._plan(payload)
        if not plan.parent_fields and not plan.has_children():
            raise NoValidFields("No valid fields provided for update.")
        self._check_references(plan.parent_fields)

        for key, value in plan.parent_fields.items():
            setattr(parent, key, value)
        if plan.parent_fields:
            self._flush_parent(plan.parent_fields)

        logger.info("更新 %s id=%s", self.spec.parent_kind, parent.id)
        return self._write_children(parent, plan)

    def compose_read(self, parent_id: int) -> Dict[str, Any]:
        """读取父记录和已存在的子资源，集合子资源按写入顺序返回列表"""
        parent = ensure_exists(self.db, self.spec.parent_model, parent_id, self.spec.parent_kind)
        result: Dict[str, Any] = {
            f"{self.spec.key}_id": parent.id,
            self.spec.key: row_to_dict(parent),
        }
        for key, descriptor in self.spec.singletons:
            row = find_for_parent(self.db, descriptor, parent.id)
            if row is not None:
                result[key] = row_to_dict(row)
        for collection in self.spec.collections:
            model = collection.descriptor.model
            rows = (
                self.db.query(model)
                .filter(getattr(model, collection.descriptor.parent_column) == parent.id)
                .order_by(model.id)
                .all()
            )
            result[collection.list_key] = [row_to_dict(row) for row in rows]
        return result

    # ============== 内部步骤 ==============

    def _plan(self, payload: Mapping[str, Any]) -> _Plan:
        """投影全部字段；任何校验错误都在写库之前抛出"""
        if not isinstance(payload, Mapping):
            raise NoValidFields("Request body must be a JSON object.")

        parent_fields = project(payload, self.spec.parent_fields)
        for name in self.spec.required:
            if name in parent_fields and _is_blank(parent_fields[name]):
                raise MissingRequiredField(name)

        singletons = []
        for key, descriptor in self.spec.singletons:
            fields = project(payload, descriptor.fields)
            if fields:
                singletons.append((key, descriptor, fields))
            else:
                logger.debug("%s 无 %s 字段，跳过", self.spec.key, key)

        collections = []
        for collection in self.spec.collections:
            item = present_subset(payload, collection.descriptor.fields)
            if item:
                collections.append((collection, prepare_items([item], collection.descriptor)))

        return _Plan(parent_fields, singletons, collections)

    def _check_references(self, parent_fields: Dict[str, Any]):
        for name, (model, kind) in self.spec.references.items():
            if name in parent_fields:
                ensure_exists(self.db, model, parent_fields[name], kind)

    def _flush_parent(self, parent_fields: Dict[str, Any]):
        try:
            self.db.flush()
        except IntegrityError as exc:
            if classify_integrity_error(exc) == FOREIGN_KEY_VIOLATION:
                ref = next(iter(self.spec.references.items()), None)
                if ref is not None:
                    name, (_, kind) = ref
                    raise ParentNotFound(kind, parent_fields.get(name)) from exc
            raise StorageFailure(self.spec.parent_model.__tablename__, str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StorageFailure(self.spec.parent_model.__tablename__, str(exc)) from exc

    def _write_children(self, parent, plan: _Plan) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            f"{self.spec.key}_id": parent.id,
            self.spec.key: None,
        }

        for key, descriptor, fields in plan.singletons:
            row = upsert(self.db, parent.id, descriptor, fields)
            result[key] = row_to_dict(row)

        for collection, prepared in plan.collections:
            rows = insert_prepared(self.db, parent.id, prepared, collection.descriptor)
            dicts = [row_to_dict(row) for row in rows]
            result[collection.key] = dicts[0] if collection.unwrap else dicts

        self.db.refresh(parent)
        result[self.spec.key] = row_to_dict(parent)
        return result


def _is_blank(value: Optional[Any]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
