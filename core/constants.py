"""Project-wide constants."""
from typing import Dict, List

ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"
ROLES: List[str] = [ROLE_STAFF, ROLE_ADMIN]

STAFF_STATUSES: List[str] = ["ACTIVE", "INACTIVE"]

ORDER_STATUSES: List[str] = [
    "PLACED",              # Stock was available and deducted
    "INSUFFICIENT_STOCK",  # Server rejected the quantity
    "CANCELLED",
]
ORDER_FILTER_ALL = "ALL"
ORDER_FILTER_LABELS: Dict[str, str] = {
    ORDER_FILTER_ALL: "All Orders",
    "PLACED": "Placed",
    "INSUFFICIENT_STOCK": "Insufficient Stock",
    "CANCELLED": "Cancelled",
}

DEFAULT_ITEM_STATUS = "Available"

# Alerting threshold (admin tools) vs critical styling threshold (badges, dashboard card)
LOW_STOCK_THRESHOLD: int = 20
CRITICAL_STOCK_THRESHOLD: int = 10
HEALTHY_STOCK_THRESHOLD: int = 50

# Persistent storage keys
STORAGE_USER_KEY = "user"
STORAGE_TOKEN_KEY = "token"
STORAGE_SENT_EMAILS_KEY = "sentEmails"

# Routes
ROUTE_LOGIN = "/login"
ROUTE_REGISTER = "/register"
ROUTE_DASHBOARD = "/dashboard"
ROUTE_INVENTORY = "/inventory"
ROUTE_ORDERS = "/orders"
ROUTE_STAFF = "/staff"
ROUTE_ADMIN_TOOLS = "/admin-features"

PUBLIC_ROUTES: List[str] = [ROUTE_LOGIN, ROUTE_REGISTER]
ADMIN_ROUTES: List[str] = [ROUTE_STAFF, ROUTE_ADMIN_TOOLS]

# Sidebar menu labels (keep in sync across app and sidebar)
MENU_DASHBOARD = "\U0001F4C8 Dashboard"
MENU_INVENTORY = "\U0001F4E6 Inventory"
MENU_ORDERS = "\U0001F6D2 Orders"
MENU_STAFF = "\U0001F465 Staff"
MENU_ADMIN_TOOLS = "⚙️ Admin Tools"

LOW_STOCK_EMAIL_SUBJECT = "Low Stock Alert - Immediate Action Required"
