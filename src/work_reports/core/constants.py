"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_EXPIRE_MINUTES = 60
MIN_PASSWORD_LENGTH = 6
UNNAMED_PROJECT = "Unnamed Project"
TOKEN_ALGORITHM = "HS256"
