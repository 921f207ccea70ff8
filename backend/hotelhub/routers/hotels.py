"""
酒店路由
"""
from typing import Any, List
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from hotelhub.database import get_db
from hotelhub.models.schemas import HotelSummary, MessageResponse
from hotelhub.services.hotel_service import HotelService

router = APIRouter(prefix="/hotels", tags=["酒店"])


@router.get("", response_model=List[HotelSummary])
def list_hotels(limit: int = 100, db: Session = Depends(get_db)):
    """获取酒店列表"""
    return HotelService(db).get_hotels(limit=limit)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_hotel(payload: Any = Body(None), db: Session = Depends(get_db)):
    """创建酒店，联系人 / 开票 / 停车 / 距离字段可平铺在同一请求体中"""
    result = HotelService(db).create_hotel(payload)
    return {"success": True, "hotelId": result["hotel_id"], **result}


@router.get("/{hotel_id}")
def get_hotel(hotel_id: int, db: Session = Depends(get_db)):
    """获取酒店及已填写的子资源"""
    return HotelService(db).get_hotel(hotel_id)


@router.get("/{hotel_id}/full")
def get_hotel_full(hotel_id: int, db: Session = Depends(get_db)):
    """酒店整体视图（含房间配置、活动、F&B）"""
    return HotelService(db).get_full(hotel_id)


@router.put("/{hotel_id}")
def update_hotel(hotel_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    """部分更新酒店"""
    result = HotelService(db).update_hotel(hotel_id, payload)
    return {"success": True, **result}


@router.delete("/{hotel_id}", response_model=MessageResponse)
def delete_hotel(hotel_id: int, db: Session = Depends(get_db)):
    """删除酒店（级联删除全部子记录）"""
    HotelService(db).delete_hotel(hotel_id)
    return MessageResponse(message="Hotel deleted successfully.")
