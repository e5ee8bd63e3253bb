"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table.
"""
from innkeep.models.property_owner import PropertyOwner
from innkeep.models.property import Property
from innkeep.models.room import RoomType, Room
from innkeep.models.guest import Guest
from innkeep.models.reservation import Reservation
from innkeep.models.staff import Staff
from innkeep.models.user import User
from innkeep.models.housekeeping import HousekeepingRequest
from innkeep.models.finance import Finance
from innkeep.models.billing import Billing, BillingItem

__all__ = [
    "PropertyOwner",
    "Property",
    "RoomType",
    "Room",
    "Guest",
    "Reservation",
    "Staff",
    "User",
    "HousekeepingRequest",
    "Finance",
    "Billing",
    "BillingItem",
]
