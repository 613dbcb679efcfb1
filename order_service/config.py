import os

ORDER_DB_PATH = os.environ.get("ORDER_DB_PATH", os.path.join("data", "orders.db"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Stands in for the service-discovery address of the inventory service.
INVENTORY_URL = os.environ.get("INVENTORY_URL", "http://localhost:8082")
INVENTORY_TIMEOUT_S = float(os.environ.get("INVENTORY_TIMEOUT_S", "3.0"))

# "kafka" or "rabbitmq"
EVENT_BACKEND = os.environ.get("EVENT_BACKEND", "kafka")
NOTIFICATION_TOPIC = os.environ.get("NOTIFICATION_TOPIC", "notificationTopic")

KAFKA_BOOTSTRAP = os.environ.get("KAFKA_BOOTSTRAP", "localhost:9092")

RABBITMQ_HOST = os.environ.get("RABBITMQ_HOST", "localhost")
RABBITMQ_PORT = int(os.environ.get("RABBITMQ_PORT", "5672"))
RABBITMQ_USER = os.environ.get("RABBITMQ_USER", "guest")
RABBITMQ_PASSWORD = os.environ.get("RABBITMQ_PASSWORD", "guest")
RABBITMQ_VHOST = os.environ.get("RABBITMQ_VHOST", "/")
RABBITMQ_EXCHANGE = os.environ.get("RABBITMQ_EXCHANGE", "order_events")
