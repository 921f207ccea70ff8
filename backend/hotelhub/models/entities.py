"""
酒店数据实体定义
父实体：Hotel / Room / Event
单例子实体：每个父实体至多一行，unique(parent_id)
集合子实体：每个父实体多行，按判别字段（category_name / name / equipment_id）区分
"""
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, ForeignKey, Text, Boolean, JSON
)
from sqlalchemy.orm import relationship
from hotelhub.database import Base


def _parent_fk(table: str, unique: bool) -> Column:
    return Column(
        Integer,
        ForeignKey(f"{table}.id", ondelete="CASCADE"),
        nullable=False,
        unique=unique,
        index=True,
    )


# ============== 父实体 ==============

class Hotel(Base):
    """酒店对象 - 所有子记录的根"""
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    system_hotel_id = Column(String(50))
    name = Column(String(255), nullable=False)
    street = Column(String(255))
    postal_code = Column(String(20))
    city = Column(String(100))
    country = Column(String(100))
    phone = Column(String(50))
    email = Column(String(255))
    website = Column(String(255))
    description = Column(Text)
    star_rating = Column(Integer)
    category = Column(String(100))
    opening_year = Column(Integer)
    latest_renovation_year = Column(Integer)
    total_rooms = Column(Integer)
    conference_rooms = Column(Integer)
    pms_system = Column(String(100))
    planned_changes = Column(Text)
    attraction_in_the_area = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接：一个酒店对应多个房间配置 / 活动
    rooms = relationship("Room", back_populates="hotel", cascade="all, delete-orphan", passive_deletes=True)
    events = relationship("Event", back_populates="hotel", cascade="all, delete-orphan", passive_deletes=True)


class Room(Base):
    """房间配置对象（每个酒店的客房主配置）"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = _parent_fk("hotels", unique=False)
    main_contact_name = Column(String(255))
    reception_hours = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    hotel = relationship("Hotel", back_populates="rooms")
    category_infos = relationship(
        "RoomCategoryInfo", back_populates="room",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="RoomCategoryInfo.id",
    )


class Event(Base):
    """活动 / 会议对象"""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = _parent_fk("hotels", unique=False)
    contact_name = Column(String(255))
    contact_phone = Column(String(50))
    contact_email = Column(String(255))
    contact_position = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    hotel = relationship("Hotel", back_populates="events")
    spaces = relationship(
        "EventSpace", back_populates="event",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="EventSpace.id",
    )
    equipment = relationship(
        "EventEquipment", back_populates="event",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="EventEquipment.id",
    )


# ============== 酒店单例子实体 ==============

class HotelContact(Base):
    """酒店联系人"""
    __tablename__ = "hotel_contacts"

    id = Column(Integer, primary_key=True)
    hotel_id = _parent_fk("hotels", unique=True)
    contact_name = Column(String(255))
    contact_position = Column(String(255))
    contact_phone = Column(String(50))
    contact_email = Column(String(255))


class HotelBilling(Base):
    """开票地址"""
    __tablename__ = "hotel_billing"

    id = Column(Integer, primary_key=True)
    hotel_id = _parent_fk("hotels", unique=True)
    billing_address_name = Column(String(255))
    billing_address_street = Column(String(255))
    billing_address_zip = Column(String(20))
    billing_address_city = Column(String(100))
    billing_address_vat = Column(String(50))


class HotelParking(Base):
    """停车信息"""
    __tablename__ = "hotel_parking"

    id = Column(Integer, primary_key=True)
    hotel_id = _parent_fk("hotels", unique=True)
    no_of_parking_spaces = Column(Integer)
    no_of_parking_spaces_garage = Column(Integer)
    no_of_parking_spaces_electric = Column(Integer)
    no_of_parking_spaces_bus = Column(Integer)
    no_of_parking_spaces_outside = Column(Integer)
    no_of_parking_spaces_disabled = Column(Integer)
    parking_cost_per_hour = Column(Float)
    parking_cost_per_day = Column(Float)


class HotelDistances(Base):
    """交通距离（公里）"""
    __tablename__ = "hotel_distances"

    id = Column(Integer, primary_key=True)
    hotel_id = _parent_fk("hotels", unique=True)
    distance_to_airport_km = Column(Float)
    distance_to_highway_km = Column(Float)
    distance_to_fair_km = Column(Float)
    distance_to_train_station = Column(Float)
    distance_to_public_transport = Column(Float)


class FoodBeverageDetails(Base):
    """餐饮（F&B）信息，联系人字段带 fnb_ 前缀"""
    __tablename__ = "food_beverage_details"

    id = Column(Integer, primary_key=True)
    hotel_id = _parent_fk("hotels", unique=True)
    fnb_contact_name = Column(String(255))
    fnb_contact_position = Column(String(255))
    fnb_contact_phone = Column(String(50))
    fnb_contact_email = Column(String(255))
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ============== 房间单例子实体 ==============

class RoomContact(Base):
    """房务联系方式"""
    __tablename__ = "room_contacts"

    id = Column(Integer, primary_key=True)
    room_id = _parent_fk("rooms", unique=True)
    phone = Column(String(50))
    email = Column(String(255))


class RoomPolicy(Base):
    """入住 / 退房政策"""
    __tablename__ = "room_policies"

    id = Column(Integer, primary_key=True)
    room_id = _parent_fk("rooms", unique=True)
    check_in = Column(String(20))
    check_out = Column(String(20))
    early_check_in_cost = Column(Float)
    late_check_out_cost = Column(Float)
    early_check_in_time_frame = Column(String(50))
    late_check_out_time = Column(String(50))
    payment_methods = Column(JSON)                  # 支付方式列表


class RoomInventory(Base):
    """房间数量统计"""
    __tablename__ = "room_inventory"

    id = Column(Integer, primary_key=True)
    room_id = _parent_fk("rooms", unique=True)
    amt_single_rooms = Column(Integer)
    amt_double_rooms = Column(Integer)
    amt_connecting_rooms = Column(Integer)
    amt_handicapped_accessible_rooms = Column(Integer)


class RoomPetPolicy(Base):
    """宠物政策"""
    __tablename__ = "room_pet_policies"

    id = Column(Integer, primary_key=True)
    room_id = _parent_fk("rooms", unique=True)
    is_dogs_allowed = Column(Boolean)
    dog_fee = Column(Float)
    dog_fee_inclusions = Column(Text)


class RoomOperationalHandling(Base):
    """收益管理 / 团队预订操作规则"""
    __tablename__ = "room_operational_handling"

    id = Column(Integer, primary_key=True)
    room_id = _parent_fk("rooms", unique=True)
    revenue_manager_name = Column(String(255))
    revenue_contact_details = Column(Text)
    demand_calendar = Column(Boolean)
    demand_calendar_infos = Column(Text)
    revenue_call = Column(Boolean)
    revenue_calls_infos = Column(Text)
    group_request_min_rooms = Column(Integer)
    group_reservation_category = Column(String(255))
    group_rates_check = Column(Boolean)
    group_rates = Column(Text)
    breakfast_share = Column(Boolean)
    first_second_option = Column(Boolean)
    shared_options = Column(Boolean)
    first_option_hold_duration = Column(String(100))
    overbooking = Column(Boolean)
    overbooking_info = Column(Text)
    min_stay_weekends = Column(Boolean)
    min_stay_weekends_infos = Column(Text)
    call_off_quota = Column(Boolean)
    call_off_method = Column(String(255))
    call_off_deadlines = Column(String(255))
    commission_rules = Column(Text)
    free_spot_policy_leisure_groups = Column(Text)
    restricted_dates = Column(Text)
    handled_by_mice_desk = Column(Boolean)
    requires_deposit = Column(Boolean)
    deposit_rules = Column(Text)
    payment_methods_room_handling = Column(JSON)
    final_invoice_handling = Column(Text)
    deposit_invoice_responsible = Column(String(255))
    info_invoice_created = Column(Boolean)


# ============== 活动单例子实体 ==============

class EventBooking(Base):
    """活动预订规则"""
    __tablename__ = "event_booking"

    id = Column(Integer, primary_key=True)
    event_id = _parent_fk("events", unique=True)
    has_options = Column(Boolean)
    allows_split_options = Column(Boolean)
    option_duration = Column(String(100))
    allows_overbooking = Column(Boolean)
    rooms_only = Column(Boolean)
    last_minute_leadtime = Column(String(100))
    contracted_companies = Column(Text)
    refused_requests = Column(Text)
    unwanted_marketing = Column(Text)
    requires_second_signature = Column(Boolean)
    exclusive_clients = Column(Boolean)


class EventFinancials(Base):
    """活动财务规则"""
    __tablename__ = "event_financials"

    id = Column(Integer, primary_key=True)
    event_id = _parent_fk("events", unique=True)
    requires_deposit = Column(Boolean)
    deposit_rules = Column(Text)
    deposit_invoicer = Column(String(255))
    has_info_invoice = Column(Boolean)
    payment_methods = Column(JSON)                  # 支付方式列表
    invoice_handling = Column(Text)
    commission_rules = Column(Text)
    has_minimum_spent = Column(Boolean)


class EventOperations(Base):
    """活动执行信息"""
    __tablename__ = "event_operations"

    id = Column(Integer, primary_key=True)
    event_id = _parent_fk("events", unique=True)
    sold_with_rooms_only = Column(Boolean)
    has_overtime_material = Column(Boolean)
    has_storage = Column(Boolean)
    lunch_location = Column(String(255))
    coffee_location = Column(String(255))
    min_participants = Column(Integer)
    material_advance_days = Column(Integer)
    room_drop_fee = Column(Float)
    deposit_needed_event = Column(Boolean)
    deposit_rules_event = Column(Text)
    payment_methods_events = Column(JSON)
    final_invoice_handling_event = Column(Text)


# ============== 集合子实体 ==============

class RoomCategoryInfo(Base):
    """房型类别明细，判别字段 category_name"""
    __tablename__ = "room_category_infos"

    id = Column(Integer, primary_key=True, index=True)
    room_id = _parent_fk("rooms", unique=False)
    category_name = Column(String(255), nullable=False)
    pms_name = Column(String(255))
    num_rooms = Column(Integer)
    size = Column(Float)
    bed_type = Column(String(100))
    surcharges_upsell = Column(Text)
    room_features = Column(Text)
    second_person_surcharge = Column(Float)
    extra_bed_surcharge = Column(Float)
    baby_bed_available = Column(Boolean)
    extra_bed_available = Column(Boolean)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room = relationship("Room", back_populates="category_infos")


class EventSpace(Base):
    """会议场地，判别字段 name"""
    __tablename__ = "event_spaces"

    id = Column(Integer, primary_key=True, index=True)
    event_id = _parent_fk("events", unique=False)
    name = Column(String(255), nullable=False)
    daily_rate = Column(Float)
    half_day_rate = Column(Float)
    size = Column(String(100))
    dimensions = Column(String(100))
    cap_rounds = Column(Integer)
    cap_theatre = Column(Integer)
    cap_classroom = Column(Integer)
    cap_u_shape = Column(Integer)
    cap_boardroom = Column(Integer)
    cap_cabaret = Column(Integer)
    cap_cocktail = Column(Integer)
    features = Column(Text)
    is_soundproof = Column(Boolean)
    has_daylight = Column(Boolean)
    has_blackout = Column(Boolean)
    has_climate_control = Column(Boolean)
    wifi_speed = Column(String(100))
    beamer_lumens = Column(Integer)
    supports_hybrid = Column(Boolean)
    presentation_software = Column(String(255))
    copy_fee = Column(Float)
    has_tech_support = Column(Boolean)

    event = relationship("Event", back_populates="spaces")


class EventEquipment(Base):
    """活动设备，判别字段 equipment_id"""
    __tablename__ = "event_equipment"

    id = Column(Integer, primary_key=True, index=True)
    event_id = _parent_fk("events", unique=False)
    equipment_id = Column(Integer, ForeignKey("equipment_types.id"), nullable=False, index=True)
    quantity = Column(Integer)
    price = Column(Float)

    event = relationship("Event", back_populates="equipment")
    equipment_type = relationship("EquipmentType")


# ============== 查找表 ==============

class EquipmentType(Base):
    """设备类型"""
    __tablename__ = "equipment_types"

    id = Column(Integer, primary_key=True, index=True)
    equipment_name = Column(String(255), nullable=False, unique=True)
    description = Column(Text)
