"""
Pydantic 模式定义
写入接口接收任意 JSON 对象，由字段投影器负责识别字段；
这里只定义读取接口的响应模式
"""
from datetime import datetime
from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict


# ============== 酒店 Schemas ==============

class HotelSummary(BaseModel):
    id: int
    system_hotel_id: Optional[str] = None
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    star_rating: Optional[int] = None
    total_rooms: Optional[int] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 通用 ==============

class MessageResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None


class CategoriesAdded(BaseModel):
    success: bool = True
    message: str
    categories_added: List[dict]
