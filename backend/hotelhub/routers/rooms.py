"""
房间配置路由
"""
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotelhub.composition.upsert import row_to_dict
from hotelhub.database import get_db
from hotelhub.models.schemas import CategoriesAdded, MessageResponse
from hotelhub.services.room_service import RoomService

router = APIRouter(prefix="/rooms", tags=["房间配置"])


# ============== 房型类别 ==============
# 固定路径放在 /{room_id} 之前

@router.get("/categories/{category_id}")
def get_category(category_id: int, db: Session = Depends(get_db)):
    category = RoomService(db).get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Room category with ID {category_id} not found.")
    return row_to_dict(category)


@router.put("/categories/{category_id}")
def update_category(category_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    """部分更新房型类别"""
    category = RoomService(db).update_category(category_id, payload)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Room category with ID {category_id} not found.")
    return {"success": True, "data": category}


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    if not RoomService(db).delete_category(category_id):
        raise HTTPException(status_code=404, detail=f"Room category with ID {category_id} not found.")
    return MessageResponse(message="Room category deleted.")


# ============== 房间主记录 ==============

@router.post("", status_code=status.HTTP_201_CREATED)
def create_room(payload: Any = Body(None), db: Session = Depends(get_db)):
    """创建房间配置，平铺的房型字段写成一条类别"""
    result = RoomService(db).create_room(payload)
    return {"success": True, **result}


@router.get("/{room_id}")
def get_room(room_id: int, db: Session = Depends(get_db)):
    return RoomService(db).get_room(room_id)


@router.put("/{room_id}")
def update_room(room_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    result = RoomService(db).update_room(room_id, payload)
    return {"success": True, **result}


@router.get("/{room_id}/categories")
def list_categories(room_id: int, db: Session = Depends(get_db)):
    return RoomService(db).get_categories(room_id)


@router.post("/{room_id}/categories", status_code=status.HTTP_201_CREATED, response_model=CategoriesAdded)
def add_categories(room_id: int, items: Any = Body(None), db: Session = Depends(get_db)):
    """批量追加房型类别（请求体为非空数组）"""
    rows = RoomService(db).add_categories(room_id, items)
    return CategoriesAdded(
        message=f"{len(rows)} category infos added to room {room_id}.",
        categories_added=rows,
    )


# ============== 收益 / 团队操作规则 ==============

@router.get("/{room_id}/handling")
def get_handling(room_id: int, db: Session = Depends(get_db)):
    handling = RoomService(db).get_handling(room_id)
    if handling is None:
        raise HTTPException(
            status_code=404,
            detail=f"Operational handling not found for room ID {room_id}.",
        )
    return handling


@router.post("/{room_id}/handling")
def upsert_handling(room_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    handling = RoomService(db).upsert_handling(room_id, payload)
    return {"success": True, "data": handling}
