import os

CART_STORAGE_KEY = os.getenv("CART_STORAGE_KEY", "@GoMarketplace:cart")
CART_STORAGE_BACKEND = os.getenv("CART_STORAGE_BACKEND", "sqlite").lower()
CART_DB_PATH = os.getenv("CART_DB_PATH", "data/cart_state.sqlite3")

CART_WRITE_RETRIES = int(os.getenv("CART_WRITE_RETRIES", "3"))
CART_WRITE_BACKOFF_MS = int(os.getenv("CART_WRITE_BACKOFF_MS", "200"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
