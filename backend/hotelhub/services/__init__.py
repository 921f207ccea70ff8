# Business Services
from hotelhub.services.hotel_service import HotelService
from hotelhub.services.room_service import RoomService
from hotelhub.services.event_service import EventService
from hotelhub.services.fnb_service import FnbService

__all__ = ['HotelService', 'RoomService', 'EventService', 'FnbService']
