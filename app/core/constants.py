"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Attendance Statuses
# Check-ins through a token always record PRESENT; managers may set any of these
STATUS_PRESENT = "present"
STATUS_EXCUSED = "excused"
STATUS_SICK = "sick"
STATUS_ABSENT = "absent"
ATTENDANCE_STATUSES = (STATUS_PRESENT, STATUS_EXCUSED, STATUS_SICK, STATUS_ABSENT)

# Roles allowed to issue tokens and edit attendance unless MANAGER_ROLES is set
DEFAULT_MANAGER_ROLES = "admin,pengurus"

# Token Code Configuration
# Codes are typed by hand, so ambiguous characters (0/O, 1/I/L) are left out
TOKEN_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
TOKEN_CODE_LENGTH = 6
TOKEN_CODE_MAX_ATTEMPTS = 5

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# JWT Token Configuration
# Token expiration time in minutes (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480
