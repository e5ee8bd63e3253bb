from innkeep.schemas.auth import Token, UserCreate, UserLogin, UserResponse, UserUpdate
from innkeep.schemas.property_owner import PropertyOwnerCreate, PropertyOwnerResponse, PropertyOwnerUpdate
from innkeep.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from innkeep.schemas.room import RoomCreate, RoomResponse, RoomTypeCreate, RoomTypeResponse
from innkeep.schemas.guest import GuestCreate, GuestResponse
from innkeep.schemas.reservation import ReservationCreate, ReservationResponse, ReservationStatistics
from innkeep.schemas.staff import StaffCreate, StaffResponse
from innkeep.schemas.housekeeping import HousekeepingCreate, HousekeepingResponse
from innkeep.schemas.finance import FinanceCreate, FinanceResponse
from innkeep.schemas.booking import BookingEmailPayload, HousekeepingReminderRequest
from innkeep.schemas.billing import BillingCreate, BillingItemCreate, BillingResponse, BillingStatistics
