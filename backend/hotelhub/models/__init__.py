# Entity Models
from hotelhub.models.entities import (
    Hotel, HotelContact, HotelBilling, HotelParking, HotelDistances, FoodBeverageDetails,
    Room, RoomContact, RoomPolicy, RoomInventory, RoomPetPolicy, RoomOperationalHandling,
    RoomCategoryInfo, Event, EventBooking, EventFinancials, EventOperations, EventSpace,
    EventEquipment, EquipmentType,
)

__all__ = [
    'Hotel', 'HotelContact', 'HotelBilling', 'HotelParking', 'HotelDistances',
    'FoodBeverageDetails', 'Room', 'RoomContact', 'RoomPolicy', 'RoomInventory',
    'RoomPetPolicy', 'RoomOperationalHandling', 'RoomCategoryInfo', 'Event',
    'EventBooking', 'EventFinancials', 'EventOperations', 'EventSpace',
    'EventEquipment', 'EquipmentType',
]
