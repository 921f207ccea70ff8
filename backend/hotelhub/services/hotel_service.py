"""
酒店服务
酒店及其联系人 / 开票 / 停车 / 交通距离子资源的组合写入，以及整体视图读取
"""
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from hotelhub.composition.aggregates import FNB_CONTACT, HOTEL_AGGREGATE
from hotelhub.composition.composer import AggregateComposer
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.upsert import find_for_parent, row_to_dict
from hotelhub.models.entities import Event, Hotel, Room
from hotelhub.services.event_service import EventService
from hotelhub.services.room_service import RoomService
from hotelhub.services.transaction import transaction

logger = logging.getLogger(__name__)


class HotelService:
    """酒店服务"""

    def __init__(self, db: Session):
        self.db = db
        self.composer = AggregateComposer(db, HOTEL_AGGREGATE)

    def get_hotels(self, limit: int = 100) -> List[Hotel]:
        """获取酒店列表"""
        return self.db.query(Hotel).order_by(Hotel.id).limit(limit).all()

    def get_hotel(self, hotel_id: int) -> Dict[str, Any]:
        """获取酒店及已填写的子资源"""
        return self.composer.compose_read(hotel_id)

    def create_hotel(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """创建酒店（一次请求写入全部子资源）"""
        with transaction(self.db, "创建酒店"):
            result = self.composer.compose_create(payload)
        return result

    def update_hotel(self, hotel_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """部分更新酒店"""
        with transaction(self.db, f"更新酒店 {hotel_id}"):
            result = self.composer.compose_update(hotel_id, payload)
        return result

    def delete_hotel(self, hotel_id: int) -> None:
        """删除酒店，子记录由外键级联删除"""
        with transaction(self.db, f"删除酒店 {hotel_id}"):
            hotel = ensure_exists(self.db, Hotel, hotel_id, "Hotel")
            self.db.delete(hotel)
        logger.info("删除 Hotel id=%s", hotel_id)

    def get_full(self, hotel_id: int) -> Dict[str, Any]:
        """酒店整体视图：酒店子资源 + F&B + 房间配置 + 活动"""
        view = self.composer.compose_read(hotel_id)

        fnb = find_for_parent(self.db, FNB_CONTACT, hotel_id)
        if fnb is not None:
            view["fnb"] = row_to_dict(fnb)

        room_service = RoomService(self.db)
        room_ids = [
            room_id for (room_id,) in
            self.db.query(Room.id).filter(Room.hotel_id == hotel_id).order_by(Room.id)
        ]
        view["rooms"] = [room_service.get_room(room_id) for room_id in room_ids]

        event_service = EventService(self.db)
        event_ids = [
            event_id for (event_id,) in
            self.db.query(Event.id).filter(Event.hotel_id == hotel_id).order_by(Event.id)
        ]
        view["events"] = [event_service.get_event(event_id) for event_id in event_ids]
        return view
