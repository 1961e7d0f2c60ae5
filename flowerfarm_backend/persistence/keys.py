# persistence/keys.py

"""
STORAGE KEYS

Exact key strings shared with the storefront client. These are a stable
contract: renaming any of them orphans data already stored by visitors.
"""

CUSTOMER_DATA_KEY = "customerData"
MANUAL_EMAILS_KEY = "manualEmails"
PENDING_ORDER_EMAILS_KEY = "pendingOrderEmails"
DEV_MODE_KEY = "devMode"

EMAIL_QUEUE_KEYS = (PENDING_ORDER_EMAILS_KEY, MANUAL_EMAILS_KEY)
