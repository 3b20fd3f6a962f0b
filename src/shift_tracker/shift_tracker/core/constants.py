"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

ATTENDANCE_COLLECTION = "attendance"

# Document field names, shared by every record store backend.
FIELD_USER_ID = "userId"
FIELD_START_TIME = "startTime"
FIELD_END_TIME = "endTime"
FIELD_LOCATION = "location"

LOCATION_PLACEHOLDER = "Location not available"
ADDRESS_UNAVAILABLE = "Unable to retrieve address"
LOCATION_MAX_LENGTH = 255
