"""Application constants."""

# Health metrics
CM_HEIGHT_THRESHOLD = 3  # heights above this are read as centimetres
DEFAULT_AGE = 25
ACTIVITY_FACTOR = 1.4  # light / moderate activity

# BMI category upper bounds (exclusive)
BMI_UNDERWEIGHT_MAX = 18.5
BMI_HEALTHY_MAX = 25.0
BMI_OVERWEIGHT_MAX = 30.0

# Demo account seeded on first start
DEMO_ACCOUNT_ID = "demo-1"
DEMO_ACCOUNT_NAME = "Demo User"
DEMO_ACCOUNT_EMAIL = "demo@fitpro.com"
DEMO_ACCOUNT_PASSWORD = "demo123"
DEMO_ACCOUNT_AVATAR = "https://ui-avatars.com/api/?name=Demo+User&background=ea580c&color=fff"

AVATAR_BASE_URL = "https://ui-avatars.com/api/"

# Sign-up / sign-in form rules
NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 6
EMAIL_PATTERN = r"(?i)^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$"
