# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

STOREFRONT_API_URL = os.getenv("STOREFRONT_API_URL", "https://qkart-fe-aq9t.onrender.com/api/v1")
HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", 10))
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
SESSION_KEY_PREFIX = os.getenv("SESSION_KEY_PREFIX", "storefront:session:")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
SEARCH_DEBOUNCE_MS = int(os.getenv("SEARCH_DEBOUNCE_MS", 500))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
