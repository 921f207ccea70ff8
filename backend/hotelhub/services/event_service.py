"""
活动服务
活动主记录 + 预订 / 财务 / 执行子资源，会议场地与设备批量追加
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from hotelhub.composition.aggregates import (
    EVENT_AGGREGATE, EVENT_BOOKING, EVENT_EQUIPMENT, EVENT_FINANCIALS, EVENT_OPERATIONS,
    EVENT_SPACES,
)
from hotelhub.composition.appender import append_all, insert_prepared, prepare_items
from hotelhub.composition.composer import AggregateComposer
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.projector import project
from hotelhub.composition.upsert import TableDescriptor, find_for_parent, row_to_dict, upsert
from hotelhub.errors import MissingRequiredField, NoValidFields
from hotelhub.models.entities import Event, EventEquipment, EventSpace, EquipmentType
from hotelhub.services.transaction import transaction

logger = logging.getLogger(__name__)

# 可单独写入的单例子资源
SECTIONS = {
    "booking": EVENT_BOOKING,
    "financials": EVENT_FINANCIALS,
    "operations": EVENT_OPERATIONS,
}


class EventService:
    """活动服务"""

    def __init__(self, db: Session):
        self.db = db
        self.composer = AggregateComposer(db, EVENT_AGGREGATE)

    def get_event(self, event_id: int) -> Dict[str, Any]:
        """活动及全部子资源，设备清单单独附加"""
        view = self.composer.compose_read(event_id)
        view["equipment"] = self._list_equipment(event_id)
        return view

    def create_event(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """创建活动；平铺的场地字段按单个场地写入"""
        with transaction(self.db, "创建活动"):
            result = self.composer.compose_create(payload)
        return result

    def update_event(self, event_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        with transaction(self.db, f"更新活动 {event_id}"):
            result = self.composer.compose_update(event_id, payload)
        return result

    def delete_event(self, event_id: int) -> None:
        with transaction(self.db, f"删除活动 {event_id}"):
            event = ensure_exists(self.db, Event, event_id, "Event")
            self.db.delete(event)
        logger.info("删除 Event id=%s", event_id)

    # ============== 单例子资源 ==============

    def get_section(self, event_id: int, section: str) -> Optional[Dict[str, Any]]:
        ensure_exists(self.db, Event, event_id, "Event")
        row = find_for_parent(self.db, SECTIONS[section], event_id)
        return row_to_dict(row) if row is not None else None

    def upsert_section(self, event_id: int, section: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """单独写入 booking / financials / operations"""
        descriptor: TableDescriptor = SECTIONS[section]
        with transaction(self.db, f"写入活动{section} event={event_id}"):
            ensure_exists(self.db, Event, event_id, "Event")
            fields = project(payload, descriptor.fields)
            if not fields:
                raise NoValidFields(f"No valid {section} fields provided.")
            row = upsert(self.db, event_id, descriptor, fields)
        self.db.refresh(row)
        return row_to_dict(row)

    # ============== 会议场地 ==============

    def get_spaces(self, event_id: int) -> List[Dict[str, Any]]:
        ensure_exists(self.db, Event, event_id, "Event")
        rows = (
            self.db.query(EventSpace)
            .filter(EventSpace.event_id == event_id)
            .order_by(EventSpace.id)
            .all()
        )
        return [row_to_dict(row) for row in rows]

    def add_spaces(self, event_id: int, body: Any) -> List[Dict[str, Any]]:
        """追加场地；单个对象视为一条的批次"""
        items = [body] if isinstance(body, dict) else body
        with transaction(self.db, f"追加场地 event={event_id}"):
            ensure_exists(self.db, Event, event_id, "Event")
            rows = append_all(self.db, event_id, items, EVENT_SPACES)
        logger.info("活动 %s 追加 %d 个场地", event_id, len(rows))
        return [row_to_dict(row) for row in rows]

    def _find_space(self, event_id: int, space_id: int) -> Optional[EventSpace]:
        return (
            self.db.query(EventSpace)
            .filter(EventSpace.id == space_id, EventSpace.event_id == event_id)
            .first()
        )

    def get_space(self, event_id: int, space_id: int) -> Optional[Dict[str, Any]]:
        ensure_exists(self.db, Event, event_id, "Event")
        space = self._find_space(event_id, space_id)
        return row_to_dict(space) if space is not None else None

    def update_space(self, event_id: int, space_id: int, payload: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """部分更新单个场地；场地不存在或不属于该活动时返回 None"""
        with transaction(self.db, f"更新场地 {space_id} event={event_id}"):
            ensure_exists(self.db, Event, event_id, "Event")
            fields = project(payload, EVENT_SPACES.fields)
            if not fields:
                raise NoValidFields("No valid event space fields provided for update.")
            if "name" in fields and not (fields["name"] or "").strip():
                raise MissingRequiredField("name")
            space = self._find_space(event_id, space_id)
            if space is None:
                return None
            for key, value in fields.items():
                setattr(space, key, value)
        self.db.refresh(space)
        return row_to_dict(space)

    def delete_space(self, event_id: int, space_id: int) -> bool:
        with transaction(self.db, f"删除场地 {space_id} event={event_id}"):
            ensure_exists(self.db, Event, event_id, "Event")
            space = self._find_space(event_id, space_id)
            if space is None:
                return False
            self.db.delete(space)
        logger.info("删除场地 %s (event=%s)", space_id, event_id)
        return True

    # ============== 设备 ==============

    def get_equipment_types(self) -> List[Dict[str, Any]]:
        rows = self.db.query(EquipmentType).order_by(EquipmentType.equipment_name).all()
        return [row_to_dict(row) for row in rows]

    def get_equipment(self, event_id: int) -> List[Dict[str, Any]]:
        """活动设备清单，附带设备类型名称"""
        ensure_exists(self.db, Event, event_id, "Event")
        return self._list_equipment(event_id)

    def _list_equipment(self, event_id: int) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(EventEquipment)
            .filter(EventEquipment.event_id == event_id)
            .order_by(EventEquipment.id)
            .all()
        )
        return [self._equipment_to_dict(row) for row in rows]

    def add_equipment(self, event_id: int, items: Any) -> List[Dict[str, Any]]:
        """批量追加设备；引用的设备类型必须全部存在，否则一条都不写"""
        with transaction(self.db, f"追加设备 event={event_id}"):
            ensure_exists(self.db, Event, event_id, "Event")
            prepared = prepare_items(items, EVENT_EQUIPMENT)
            for equipment_id in sorted({fields["equipment_id"] for fields in prepared}):
                ensure_exists(self.db, EquipmentType, equipment_id, "Equipment type")
            rows = insert_prepared(self.db, event_id, prepared, EVENT_EQUIPMENT)
        logger.info("活动 %s 追加 %d 件设备", event_id, len(rows))
        return [self._equipment_to_dict(row) for row in rows]

    @staticmethod
    def _equipment_to_dict(row: EventEquipment) -> Dict[str, Any]:
        data = row_to_dict(row)
        data["equipment_name"] = row.equipment_type.equipment_name
        return data
