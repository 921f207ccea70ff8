"""
房间配置服务
房间主记录 + 联系方式 / 政策 / 数量 / 宠物政策，房型类别批量追加，收益操作规则
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from hotelhub.composition.aggregates import ROOM_AGGREGATE, ROOM_CATEGORY_INFOS, ROOM_HANDLING
from hotelhub.composition.appender import append_all
from hotelhub.composition.composer import AggregateComposer
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.projector import project
from hotelhub.composition.upsert import find_for_parent, row_to_dict, upsert
from hotelhub.errors import MissingRequiredField, NoValidFields
from hotelhub.models.entities import Room, RoomCategoryInfo
from hotelhub.services.transaction import transaction

logger = logging.getLogger(__name__)


class RoomService:
    """房间配置服务"""

    def __init__(self, db: Session):
        self.db = db
        self.composer = AggregateComposer(db, ROOM_AGGREGATE)

    # ============== 房间主记录 ==============

    def get_room(self, room_id: int) -> Dict[str, Any]:
        """房间配置及全部子资源"""
        view = self.composer.compose_read(room_id)
        handling = find_for_parent(self.db, ROOM_HANDLING, room_id)
        if handling is not None:
            view["handling"] = row_to_dict(handling)
        return view

    def create_room(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """创建房间配置；平铺的房型字段按单条类别写入"""
        with transaction(self.db, "创建房间配置"):
            result = self.composer.compose_create(payload)
        return result

    def update_room(self, room_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        with transaction(self.db, f"更新房间配置 {room_id}"):
            result = self.composer.compose_update(room_id, payload)
        return result

    # ============== 房型类别 ==============

    def add_categories(self, room_id: int, items: Any) -> List[Dict[str, Any]]:
        """批量追加房型类别，整批校验通过才写入"""
        with transaction(self.db, f"追加房型类别 room={room_id}"):
            ensure_exists(self.db, Room, room_id, "Room")
            rows = append_all(self.db, room_id, items, ROOM_CATEGORY_INFOS)
        logger.info("房间 %s 追加 %d 个房型类别", room_id, len(rows))
        return [row_to_dict(row) for row in rows]

    def get_categories(self, room_id: int) -> List[Dict[str, Any]]:
        ensure_exists(self.db, Room, room_id, "Room")
        rows = (
            self.db.query(RoomCategoryInfo)
            .filter(RoomCategoryInfo.room_id == room_id)
            .order_by(RoomCategoryInfo.id)
            .all()
        )
        return [row_to_dict(row) for row in rows]

    def get_category(self, category_id: int) -> Optional[RoomCategoryInfo]:
        return self.db.query(RoomCategoryInfo).filter(RoomCategoryInfo.id == category_id).first()

    def update_category(self, category_id: int, payload: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """部分更新单个房型类别；类别不存在时返回 None"""
        fields = project(payload, ROOM_CATEGORY_INFOS.fields)
        if not fields:
            raise NoValidFields("No valid category fields provided for update.")
        if "category_name" in fields and not (fields["category_name"] or "").strip():
            raise MissingRequiredField("category_name")

        with transaction(self.db, f"更新房型类别 {category_id}"):
            category = self.get_category(category_id)
            if category is None:
                return None
            for key, value in fields.items():
                setattr(category, key, value)
        self.db.refresh(category)
        return row_to_dict(category)

    def delete_category(self, category_id: int) -> bool:
        with transaction(self.db, f"删除房型类别 {category_id}"):
            category = self.get_category(category_id)
            if category is None:
                return False
            self.db.delete(category)
        return True

    # ============== 收益 / 团队操作规则 ==============

    def get_handling(self, room_id: int) -> Optional[Dict[str, Any]]:
        ensure_exists(self.db, Room, room_id, "Room")
        row = find_for_parent(self.db, ROOM_HANDLING, room_id)
        return row_to_dict(row) if row is not None else None

    def upsert_handling(self, room_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        with transaction(self.db, f"写入操作规则 room={room_id}"):
            ensure_exists(self.db, Room, room_id, "Room")
            fields = project(payload, ROOM_HANDLING.fields)
            if not fields:
                raise NoValidFields("No valid operational handling fields provided.")
            row = upsert(self.db, room_id, ROOM_HANDLING, fields)
        self.db.refresh(row)
        return row_to_dict(row)
