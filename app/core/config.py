import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./billing.db")

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

# ✅ Razorpay
RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID")
RAZORPAY_SECRET = os.getenv("RAZORPAY_SECRET")
RAZORPAY_PLAN_ID = os.getenv("RAZORPAY_PLAN_ID")

# ✅ Subscription policy
SUBSCRIPTION_TOTAL_COUNT = int(os.getenv("SUBSCRIPTION_TOTAL_COUNT", "12"))
REFUND_WINDOW_DAYS = int(os.getenv("REFUND_WINDOW_DAYS", "14"))
REFUND_SPEED = os.getenv("REFUND_SPEED", "optimum")

# Terminal value persisted on cancellation: "inactive" or "cancelled"
SUBSCRIPTION_CANCELLED_STATUS = os.getenv("SUBSCRIPTION_CANCELLED_STATUS", "inactive")
if SUBSCRIPTION_CANCELLED_STATUS not in ("inactive", "cancelled"):
    raise ValueError("SUBSCRIPTION_CANCELLED_STATUS must be 'inactive' or 'cancelled'")

# ✅ HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
