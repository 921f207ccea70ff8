# API Routers
from hotelhub.routers import hotels, fnb, rooms, events

__all__ = ['hotels', 'fnb', 'rooms', 'events']
