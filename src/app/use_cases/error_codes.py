"""Stable error codes returned by use cases"""

# Purchase preconditions, in the order they are checked
PLATFORM_UNAVAILABLE = "PLATFORM_UNAVAILABLE"
PRICE_NOT_CONFIGURED = "PRICE_NOT_CONFIGURED"
USER_NOT_FOUND = "USER_NOT_FOUND"
USER_INACTIVE = "USER_INACTIVE"
INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
NO_CAPACITY_AVAILABLE = "NO_CAPACITY_AVAILABLE"

# Infrastructure fault during the purchase transaction
PURCHASE_FAILED = "PURCHASE_FAILED"

PLATFORM_NOT_FOUND = "PLATFORM_NOT_FOUND"
PLATFORM_NAME_TAKEN = "PLATFORM_NAME_TAKEN"
INVALID_DURATION = "INVALID_DURATION"
ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
SLOT_IN_USE = "SLOT_IN_USE"
ALLOCATION_NOT_FOUND = "ALLOCATION_NOT_FOUND"
ALLOCATION_INACTIVE = "ALLOCATION_INACTIVE"
EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
INVALID_AMOUNT = "INVALID_AMOUNT"
