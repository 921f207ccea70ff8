"""
静态字段表：字段 -> 子资源 -> 类型标签
模块导入时构建并校验，同一聚合内重复声明的字段直接报错
"""
from hotelhub.composition.composer import AggregateSpec, CollectionSpec
from hotelhub.composition.projector import (
    BOOLEAN, INTEGER, JSON_ARRAY, NUMBER, TEXT, FieldSpec, declare,
)
from hotelhub.composition.upsert import TableDescriptor
from hotelhub.models.entities import (
    Hotel, HotelContact, HotelBilling, HotelParking, HotelDistances, FoodBeverageDetails,
    Room, RoomContact, RoomPolicy, RoomInventory, RoomPetPolicy, RoomOperationalHandling,
    RoomCategoryInfo, Event, EventBooking, EventFinancials, EventOperations, EventSpace,
    EventEquipment,
)


# ============== 酒店 ==============

HOTEL_FIELDS = (
    declare(TEXT, "system_hotel_id", "name", "street", "postal_code", "city", "country",
            "phone", "email", "website", "description", "category", "pms_system",
            "planned_changes", "attraction_in_the_area")
    + declare(INTEGER, "star_rating", "opening_year", "latest_renovation_year",
              "total_rooms", "conference_rooms")
)

HOTEL_CONTACT = TableDescriptor(
    HotelContact, "hotel_id", "Hotel",
    fields=(
        FieldSpec("contact_name", TEXT, ("contactName",)),
        FieldSpec("contact_position", TEXT, ("contactPosition",)),
        FieldSpec("contact_phone", TEXT, ("contactPhone",)),
        FieldSpec("contact_email", TEXT, ("contactEmail",)),
    ),
)

HOTEL_BILLING = TableDescriptor(
    HotelBilling, "hotel_id", "Hotel",
    fields=declare(TEXT, "billing_address_name", "billing_address_street",
                   "billing_address_zip", "billing_address_city", "billing_address_vat"),
)

HOTEL_PARKING = TableDescriptor(
    HotelParking, "hotel_id", "Hotel",
    fields=(
        declare(INTEGER, "no_of_parking_spaces", "no_of_parking_spaces_garage",
                "no_of_parking_spaces_electric", "no_of_parking_spaces_bus",
                "no_of_parking_spaces_outside", "no_of_parking_spaces_disabled")
        + declare(NUMBER, "parking_cost_per_hour", "parking_cost_per_day")
    ),
)

HOTEL_DISTANCES = TableDescriptor(
    HotelDistances, "hotel_id", "Hotel",
    fields=declare(NUMBER, "distance_to_airport_km", "distance_to_highway_km",
                   "distance_to_fair_km", "distance_to_train_station",
                   "distance_to_public_transport"),
)

# F&B 联系人：前端也会发不带 fnb_ 前缀的字段
FNB_CONTACT = TableDescriptor(
    FoodBeverageDetails, "hotel_id", "Hotel",
    fields=(
        FieldSpec("fnb_contact_name", TEXT, ("contact_name",)),
        FieldSpec("fnb_contact_position", TEXT, ("contact_position",)),
        FieldSpec("fnb_contact_phone", TEXT, ("contact_phone",)),
        FieldSpec("fnb_contact_email", TEXT, ("contact_email",)),
    ),
)

HOTEL_AGGREGATE = AggregateSpec(
    key="hotel",
    parent_model=Hotel,
    parent_kind="Hotel",
    parent_fields=HOTEL_FIELDS,
    required=("name",),
    singletons=(
        ("contact", HOTEL_CONTACT),
        ("billing", HOTEL_BILLING),
        ("parking", HOTEL_PARKING),
        ("distances", HOTEL_DISTANCES),
    ),
)


# ============== 房间配置 ==============

ROOM_FIELDS = (
    (FieldSpec("hotel_id", INTEGER),)
    + declare(TEXT, "main_contact_name", "reception_hours")
)

ROOM_CONTACTS = TableDescriptor(
    RoomContact, "room_id", "Room",
    fields=declare(TEXT, "phone", "email"),
)

ROOM_POLICIES = TableDescriptor(
    RoomPolicy, "room_id", "Room",
    fields=(
        declare(TEXT, "check_in", "check_out", "early_check_in_time_frame", "late_check_out_time")
        + declare(NUMBER, "early_check_in_cost", "late_check_out_cost")
        + declare(JSON_ARRAY, "payment_methods")
    ),
)

ROOM_INVENTORY = TableDescriptor(
    RoomInventory, "room_id", "Room",
    fields=declare(INTEGER, "amt_single_rooms", "amt_double_rooms",
                   "amt_connecting_rooms", "amt_handicapped_accessible_rooms"),
)

ROOM_PET_POLICIES = TableDescriptor(
    RoomPetPolicy, "room_id", "Room",
    fields=(
        declare(BOOLEAN, "is_dogs_allowed")
        + declare(NUMBER, "dog_fee")
        + declare(TEXT, "dog_fee_inclusions")
    ),
)

ROOM_HANDLING = TableDescriptor(
    RoomOperationalHandling, "room_id", "Room",
    fields=(
        declare(TEXT, "revenue_manager_name", "revenue_contact_details", "demand_calendar_infos",
                "revenue_calls_infos", "group_reservation_category", "group_rates",
                "first_option_hold_duration", "overbooking_info", "min_stay_weekends_infos",
                "call_off_method", "call_off_deadlines", "commission_rules",
                "free_spot_policy_leisure_groups", "restricted_dates", "deposit_rules",
                "final_invoice_handling", "deposit_invoice_responsible")
        + declare(BOOLEAN, "demand_calendar", "revenue_call", "group_rates_check",
                  "breakfast_share", "first_second_option", "shared_options", "overbooking",
                  "min_stay_weekends", "call_off_quota", "handled_by_mice_desk",
                  "requires_deposit", "info_invoice_created")
        + declare(INTEGER, "group_request_min_rooms")
        + declare(JSON_ARRAY, "payment_methods_room_handling")
    ),
)

ROOM_CATEGORY_INFOS = TableDescriptor(
    RoomCategoryInfo, "room_id", "Room",
    fields=(
        declare(TEXT, "category_name", "pms_name", "bed_type", "surcharges_upsell", "room_features")
        + declare(INTEGER, "num_rooms")
        + declare(NUMBER, "size", "second_person_surcharge", "extra_bed_surcharge")
        + declare(BOOLEAN, "baby_bed_available", "extra_bed_available")
    ),
    label="category info",
    discriminator="category_name",
)

ROOM_AGGREGATE = AggregateSpec(
    key="room",
    parent_model=Room,
    parent_kind="Room",
    parent_fields=ROOM_FIELDS,
    required=("hotel_id",),
    references={"hotel_id": (Hotel, "Hotel")},
    singletons=(
        ("contacts", ROOM_CONTACTS),
        ("policies", ROOM_POLICIES),
        ("inventory", ROOM_INVENTORY),
        ("pet_policies", ROOM_PET_POLICIES),
    ),
    collections=(CollectionSpec("category_infos", ROOM_CATEGORY_INFOS),),
)


# ============== 活动 ==============

EVENT_FIELDS = (
    FieldSpec("hotel_id", INTEGER),
    FieldSpec("contact_name", TEXT, ("contactName",)),
    FieldSpec("contact_phone", TEXT, ("contactPhone",)),
    FieldSpec("contact_email", TEXT, ("contactEmail",)),
    FieldSpec("contact_position", TEXT, ("contactPosition",)),
)

EVENT_BOOKING = TableDescriptor(
    EventBooking, "event_id", "Event",
    fields=(
        declare(BOOLEAN, "has_options", "allows_split_options", "allows_overbooking",
                "rooms_only", "requires_second_signature", "exclusive_clients")
        + declare(TEXT, "option_duration", "contracted_companies", "refused_requests",
                  "unwanted_marketing")
        + (FieldSpec("last_minute_leadtime", TEXT, ("last_minute_lead_time",)),)
    ),
)

EVENT_FINANCIALS = TableDescriptor(
    EventFinancials, "event_id", "Event",
    fields=(
        declare(BOOLEAN, "requires_deposit", "has_info_invoice", "has_minimum_spent")
        + declare(TEXT, "deposit_rules", "deposit_invoicer", "invoice_handling", "commission_rules")
        + declare(JSON_ARRAY, "payment_methods")
    ),
)

EVENT_OPERATIONS = TableDescriptor(
    EventOperations, "event_id", "Event",
    fields=(
        declare(BOOLEAN, "sold_with_rooms_only", "has_overtime_material", "has_storage",
                "deposit_needed_event")
        + declare(TEXT, "lunch_location", "coffee_location", "deposit_rules_event",
                  "final_invoice_handling_event")
        + declare(INTEGER, "min_participants", "material_advance_days")
        + declare(NUMBER, "room_drop_fee")
        + declare(JSON_ARRAY, "payment_methods_events")
    ),
)

EVENT_SPACES = TableDescriptor(
    EventSpace, "event_id", "Event",
    fields=(
        declare(TEXT, "name", "size", "dimensions", "features", "wifi_speed",
                "presentation_software")
        + declare(NUMBER, "daily_rate", "half_day_rate", "copy_fee")
        + declare(INTEGER, "cap_rounds", "cap_theatre", "cap_classroom", "cap_u_shape",
                  "cap_boardroom", "cap_cabaret", "cap_cocktail", "beamer_lumens")
        + declare(BOOLEAN, "is_soundproof", "has_daylight", "has_blackout",
                  "has_climate_control", "supports_hybrid", "has_tech_support")
    ),
    label="event space",
    discriminator="name",
)

# 设备不在活动聚合里，只走单独的批量接口
EVENT_EQUIPMENT = TableDescriptor(
    EventEquipment, "event_id", "Event",
    fields=(
        declare(INTEGER, "equipment_id", "quantity")
        + declare(NUMBER, "price")
    ),
    label="equipment item",
    discriminator="equipment_id",
)

EVENT_AGGREGATE = AggregateSpec(
    key="event",
    parent_model=Event,
    parent_kind="Event",
    parent_fields=EVENT_FIELDS,
    required=("hotel_id",),
    references={"hotel_id": (Hotel, "Hotel")},
    singletons=(
        ("booking", EVENT_BOOKING),
        ("financials", EVENT_FINANCIALS),
        ("operations", EVENT_OPERATIONS),
    ),
    collections=(CollectionSpec("space", EVENT_SPACES, unwrap=True, read_key="spaces"),),
)
