# config.py
import os

from dotenv import load_dotenv

# .env локально; в облаке переменные приходят из окружения
load_dotenv()

# --- Meetup API ---
MEETUP_API_URL = os.getenv("MEETUP_API_URL", "https://api.meetup.com/find/groups")
MEETUP_ZIP = os.getenv("MEETUP_ZIP", "meetup1")
MEETUP_CATEGORY = os.getenv("MEETUP_CATEGORY", "34")  # Tech
MEETUP_FIELDS = os.getenv("MEETUP_FIELDS", "score,name,link,city,next_event")
MEETUP_PAGE_SIZE = int(os.getenv("MEETUP_PAGE_SIZE", "50"))

# --- credential lookup ---
# firestore | env (env читает MEETUP_API_KEY в момент запроса)
SECRET_BACKEND = os.getenv("SECRET_BACKEND", "firestore").lower()
CONFIG_COLLECTION = os.getenv("CONFIG_COLLECTION", "runtimeconfig")
CONFIG_STORE = os.getenv("CONFIG_STORE", "dev-config")
CONFIG_KEY = os.getenv("CONFIG_KEY", "api-key")

# --- outbound HTTP ---
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "8.0"))
HTTP_CONNECT_TIMEOUT = float(os.getenv("HTTP_CONNECT_TIMEOUT", "4.0"))
FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "0"))

# --- rendering ---
VOICE_SOURCE = os.getenv("VOICE_SOURCE", "google")
DISPLAY_TZ = os.getenv("DISPLAY_TZ", "UTC")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.environ.get("PORT", 5000))
