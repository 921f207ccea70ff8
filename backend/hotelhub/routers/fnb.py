"""
餐饮（F&B）路由
"""
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session
from hotelhub.database import get_db
from hotelhub.models.schemas import MessageResponse
from hotelhub.services.fnb_service import FnbService

router = APIRouter(prefix="/hotels", tags=["餐饮"])


@router.post("/{hotel_id}/fb/contact", response_model=MessageResponse)
def upsert_fnb_contact(hotel_id: int, payload: Any = Body(None), db: Session = Depends(get_db)):
    """写入 F&B 联系人"""
    contact = FnbService(db).upsert_contact(hotel_id, payload)
    return MessageResponse(message="F&B contact information saved.", data=contact)


@router.get("/{hotel_id}/fb/contact")
def get_fnb_contact(hotel_id: int, db: Session = Depends(get_db)):
    """获取 F&B 联系人"""
    contact = FnbService(db).get_contact(hotel_id)
    if contact is None:
        raise HTTPException(
            status_code=404,
            detail=f"F&B contact information not found for hotel ID {hotel_id}.",
        )
    return contact


@router.delete("/{hotel_id}/fb/contact", response_model=MessageResponse)
def delete_fnb_contact(hotel_id: int, db: Session = Depends(get_db)):
    """清空 F&B 联系人"""
    if not FnbService(db).delete_contact(hotel_id):
        raise HTTPException(
            status_code=404,
            detail=f"F&B contact information not found for hotel ID {hotel_id}.",
        )
    return MessageResponse(message="F&B contact information deleted.")
