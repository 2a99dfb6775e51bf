"""User-visible message constants shared by services and routers."""

UNAUTHORIZED = "Unauthorized"
VALIDATION_ERROR = "Validation error"
INTERNAL_ERROR = "Internal server error"
NOT_FOUND = "Not Found"

SIGNED_UP = "Signed up"
LOGGED_IN = "Logged in"
INVALID_CREDENTIALS = "Invalid email or password"
USER_NOT_FOUND = "User not found"
USER_ALREADY_REGISTERED = "User already registered"
USER_DELETED = "User deleted"

TAX_PROFILE_NOT_FOUND = "Tax profile does not exist or does not belong to user"
TAX_PROFILE_DELETED = "Tax profile deleted"

INVOICE_NOT_FOUND = "Invoice does not exist or does not belong to user"
INVOICE_DELETED = "Invoice deleted"

INVALID_DATE_RANGE = "Invalid date range"
INVALID_PAGINATION = "Invalid pagination"

DEFAULT_SKIP = 0
DEFAULT_TAKE = 10
MAX_TAKE = 100
