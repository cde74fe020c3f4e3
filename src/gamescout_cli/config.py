import os

from dotenv import load_dotenv

load_dotenv()

CATALOG_BASE_URL = os.getenv("CATALOG_BASE_URL", "https://api.rawg.io/api")
DEALS_BASE_URL = os.getenv("DEALS_BASE_URL", "https://www.cheapshark.com/api/1.0")
RAWG_API_KEY = os.getenv("RAWG_API_KEY", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))  # seconds
LOG_FILE = os.getenv("LOG_FILE", "logs/gamescout.log")
