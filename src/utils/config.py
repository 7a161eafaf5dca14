# runtime settings, overridable through environment variables
import os

API_BASE_URL = os.getenv("SHOPHUB_API_URL", "https://fakestoreapi.com").rstrip("/")
HTTP_TIMEOUT = float(os.getenv("SHOPHUB_HTTP_TIMEOUT", "10"))

DB_PATH = os.getenv("SHOPHUB_DB_PATH", "data/shophub.sqlite")

# keys in the durable key-value store
USERS_KEY = "shophub-users"
SESSION_KEY = "shophub-user"

LOG_FILE = os.getenv("SHOPHUB_LOG_FILE")
