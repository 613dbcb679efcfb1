import os

INVENTORY_DB_PATH = os.environ.get("INVENTORY_DB_PATH", os.path.join("data", "inventory.db"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
