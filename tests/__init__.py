import os

# Cheap bcrypt cost and dev cookies for the whole suite; must be set before app.core.config loads.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
