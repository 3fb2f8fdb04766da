"""Table and field names in the record store.

The store is schema-flexible; these are the keys this service reads or
writes. Everything else in a record's field-bag is passed through untouched.
"""

from typing import Final

EVENTS_TABLE: Final[str] = "Supplier Pickup Events"
SCHEDULED_SLOTS_TABLE: Final[str] = "Scheduled Slots"
DRIVERS_TABLE: Final[str] = "Drivers"

# Supplier Pickup Events
EVENT_START_TIME: Final[str] = "Start Time"
EVENT_PICKUP_ADDRESS: Final[str] = "Pickup Address"
EVENT_TOTAL_VOLUNTEERS: Final[str] = "Total Count of Volunteers"
EVENT_TOTAL_DRIVERS: Final[str] = "Total Count of Drivers for Event"
EVENT_TOTAL_PACKERS: Final[str] = "Total Count of Packers for Event"
EVENT_SPECIAL_GROUPS: Final[str] = "Special Groups"
EVENT_SCHEDULED_SLOTS: Final[str] = "Scheduled Slots"

# Scheduled Slots
SLOT_FIRST_NAME: Final[str] = "First Name"
SLOT_LAST_NAME: Final[str] = "Last Name"
SLOT_TIME: Final[str] = "Correct slot time"
SLOT_TYPE: Final[str] = "Type"
SLOT_CONFIRMED: Final[str] = "Confirmed?"
SLOT_VOLUNTEER_STATUS: Final[str] = "Volunteer Status"
SLOT_EMAIL: Final[str] = "Email"
SLOT_VOLUNTEER_GROUP: Final[str] = "Volunteer Group (for MAKE)"
SLOT_CANT_COME: Final[str] = "Can't Come"

# Drivers
DRIVER_FIRST_NAME: Final[str] = "First Name"
DRIVER_LAST_NAME: Final[str] = "Last Name"
DRIVER_TIME_SLOT: Final[str] = "Time Slot"
DRIVER_DELIVERY_COUNT: Final[str] = "Delivery Count"
DRIVER_ZIP_CODE: Final[str] = "Zip Code"
DRIVER_VEHICLE: Final[str] = "Vehicle"
DRIVER_RESTRICTED_LOCATIONS: Final[str] = "Restricted Locations"
