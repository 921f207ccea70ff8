"""
活动路由
"""
from enum import Enum
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotelhub.database import get_db
from hotelhub.models.schemas import MessageResponse
from hotelhub.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["活动"])


class EventSection(str, Enum):
    """可单独写入的活动子资源"""
    BOOKING = "booking"
    FINANCIALS = "financials"
    OPERATIONS = "operations"


@router.get("/equipment-types")
def list_equipment_types(db: Session = Depends(get_db)):
    """设备类型查找表"""
    return EventService(db).get_equipment_types()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(payload: Any = Body(None), db: Session = Depends(get_db)):
    """创建活动，预订 / 财务 / 执行 / 场地字段可平铺在同一请求体中"""
    result = EventService(db).create_event(payload)
    return {"success": True, **result}


@router.get("/{event_id}")
def get_event(event_id: int, db: Session = Depends(get_db)):
    return EventService(db).get_event(event_id)


@router.put("/{event_id}")
def update_event(event_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    result = EventService(db).update_event(event_id, payload)
    return {"success": True, **result}


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    EventService(db).delete_event(event_id)
    return MessageResponse(message="Event deleted successfully.")


# ============== 会议场地 ==============

@router.get("/{event_id}/spaces")
def list_spaces(event_id: int, db: Session = Depends(get_db)):
    return EventService(db).get_spaces(event_id)


@router.post("/{event_id}/spaces", status_code=status.HTTP_201_CREATED)
def add_spaces(event_id: int, body: Any = Body(None), db: Session = Depends(get_db)):
    """追加场地：数组或单个对象"""
    rows = EventService(db).add_spaces(event_id, body)
    return {
        "success": True,
        "message": f"{len(rows)} event spaces added to event {event_id}.",
        "spaces_added": rows,
    }


@router.get("/{event_id}/spaces/{space_id}")
def get_space(event_id: int, space_id: int, db: Session = Depends(get_db)):
    data = EventService(db).get_space(event_id, space_id)
    if data is None:
        raise HTTPException(status_code=404, detail=f"Event space with ID {space_id} not found.")
    return data


@router.put("/{event_id}/spaces/{space_id}")
def update_space(
    event_id: int,
    space_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    data = EventService(db).update_space(event_id, space_id, payload)
    if data is None:
        raise HTTPException(status_code=404, detail=f"Event space with ID {space_id} not found.")
    return {"success": True, "data": data}


@router.delete("/{event_id}/spaces/{space_id}", response_model=MessageResponse)
def delete_space(event_id: int, space_id: int, db: Session = Depends(get_db)):
    if not EventService(db).delete_space(event_id, space_id):
        raise HTTPException(status_code=404, detail=f"Event space with ID {space_id} not found.")
    return MessageResponse(message="Event space deleted successfully.")


# ============== 设备 ==============

@router.get("/{event_id}/equipment")
def list_equipment(event_id: int, db: Session = Depends(get_db)):
    return EventService(db).get_equipment(event_id)


@router.post("/{event_id}/equipment", status_code=status.HTTP_201_CREATED)
def add_equipment(event_id: int, body: Any = Body(None), db: Session = Depends(get_db)):
    """追加设备：必须是数组，设备类型需已存在"""
    rows = EventService(db).add_equipment(event_id, body)
    return {
        "success": True,
        "message": f"{len(rows)} equipment items added to event {event_id}.",
        "equipment_added": rows,
    }


# ============== 预订 / 财务 / 执行 ==============

@router.get("/{event_id}/{section}")
def get_section(event_id: int, section: EventSection, db: Session = Depends(get_db)):
    data = EventService(db).get_section(event_id, section.value)
    if data is None:
        raise HTTPException(
            status_code=404,
            detail=f"Event {section.value} not found for event ID {event_id}.",
        )
    return data


@router.post("/{event_id}/{section}")
def upsert_section(
    event_id: int,
    section: EventSection,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    data = EventService(db).upsert_section(event_id, section.value, payload)
    return {"success": True, section.value: data}
