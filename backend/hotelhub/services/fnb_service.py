"""
餐饮（F&B）联系人服务
"""
import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from hotelhub.composition.aggregates import FNB_CONTACT
from hotelhub.composition.guard import ensure_exists
from hotelhub.composition.projector import project
from hotelhub.composition.upsert import find_for_parent, upsert
from hotelhub.errors import NoValidFields
from hotelhub.models.entities import Hotel
from hotelhub.services.transaction import transaction

logger = logging.getLogger(__name__)

CONTACT_COLUMNS = tuple(spec.name for spec in FNB_CONTACT.fields)


class FnbService:
    """F&B 联系人服务"""

    def __init__(self, db: Session):
        self.db = db

    def upsert_contact(self, hotel_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """写入 F&B 联系人（存在则部分更新）"""
        with transaction(self.db, f"写入 F&B 联系人 hotel={hotel_id}"):
            ensure_exists(self.db, Hotel, hotel_id, "Hotel")
            fields = project(payload, FNB_CONTACT.fields)
            if not fields:
                raise NoValidFields("No valid F&B contact fields provided.")
            row = upsert(self.db, hotel_id, FNB_CONTACT, fields)
        self.db.refresh(row)
        return {column: getattr(row, column) for column in CONTACT_COLUMNS}

    def get_contact(self, hotel_id: int) -> Optional[Dict[str, Any]]:
        """没有记录或联系人字段全部为空时返回 None"""
        row = find_for_parent(self.db, FNB_CONTACT, hotel_id)
        if row is None:
            return None
        contact = {column: getattr(row, column) for column in CONTACT_COLUMNS}
        if all(value is None for value in contact.values()):
            return None
        return contact

    def delete_contact(self, hotel_id: int) -> bool:
        """清空联系人字段（保留 F&B 记录本身）"""
        with transaction(self.db, f"清空 F&B 联系人 hotel={hotel_id}"):
            row = find_for_parent(self.db, FNB_CONTACT, hotel_id)
            if row is None:
                return False
            for column in CONTACT_COLUMNS:
                setattr(row, column, None)
        logger.info("清空 F&B 联系人 hotel=%s", hotel_id)
        return True
