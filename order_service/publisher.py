import json
import logging
import threading
import time
from typing import Protocol

import pika
from confluent_kafka import Producer
from confluent_kafka.error import KafkaException

from order_service import config
from order_service.errors import PublishError

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    def publish(self, topic: str, payload: dict) -> None:
        ...

    def close(self) -> None:
        ...


class KafkaPublisher:
    def __init__(self, bootstrap_servers: str = "localhost:9092", producer: Producer | None = None):
        self.bootstrap_servers = bootstrap_servers
        self.producer = producer or Producer({
            "bootstrap.servers": bootstrap_servers,
            "acks": "all",  # All replicas must acknowledge
        })

    def delivery_report(self, err, msg):
        """Callback for message delivery success/failure."""
        if err is not None:
            key = msg.key()
            order_id = key.decode("utf-8") if key else "unknown"
            logger.error(
                "Message delivery failed for order %s on %s: %s", order_id, msg.topic(), err
            )
        else:
            logger.info("Message delivered to %s [%s]", msg.topic(), msg.partition())

    def publish(self, topic: str, payload: dict) -> None:
        """
        Enqueue ``payload`` on ``topic`` without waiting for delivery.

        The message is keyed by its ``order_id`` when present. Delivery
        results arrive through ``delivery_report``.
        """
        key = payload.get("order_id")
        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=json.dumps(payload).encode("utf-8"),
                callback=self.delivery_report,
            )
        except (KafkaException, BufferError) as e:
            raise PublishError(f"Kafka error publishing to {topic}: {e}") from e
        # Serve delivery callbacks of earlier messages.
        self.producer.poll(0)

    def close(self):
        """Flush buffered messages."""
        self.producer.flush(timeout=5)


# Errors after which the connection or channel is unusable.
_CONNECTION_LOST = (
    pika.exceptions.AMQPConnectionError,
    pika.exceptions.ChannelClosed,
    pika.exceptions.ChannelWrongStateError,
)


class RabbitPublisher:
    def __init__(self, exchange: str, params: pika.ConnectionParameters | None = None, channel=None):
        self.exchange = exchange
        self.params = params or _rabbit_params()
        self.connection = None
        self.channel = channel
        # BlockingConnection is not thread-safe and request threads share it.
        self._lock = threading.Lock()
        if self.channel is None:
            self._connect()

    def _connect(self, retries=15, delay=2):
        for attempt in range(1, retries + 1):
            try:
                self.connection = pika.BlockingConnection(self.params)
                self.channel = self.connection.channel()
                self.channel.exchange_declare(
                    exchange=self.exchange, exchange_type="topic", durable=True
                )
                return
            except pika.exceptions.AMQPConnectionError:
                logger.warning("RabbitMQ not ready, retry %s/%s", attempt, retries)
                if attempt < retries:
                    time.sleep(delay)
        raise RuntimeError("Cannot connect to RabbitMQ")

    def _basic_publish(self, topic: str, body: str) -> None:
        if self.channel is None or not self.channel.is_open:
            self._connect(retries=1)
        self.channel.basic_publish(
            exchange=self.exchange,
            routing_key=topic,
            body=body,
            properties=pika.BasicProperties(
                delivery_mode=2,
                content_type="application/json",
            ),
        )

    def publish(self, topic: str, payload: dict) -> None:
        """
        Publish ``payload`` with ``topic`` as the routing key.

        A connection dropped by the broker (e.g. missed heartbeats while
        idle) is reopened once before giving up with PublishError.
        """
        body = json.dumps(payload)
        with self._lock:
            try:
                self._basic_publish(topic, body)
            except _CONNECTION_LOST as e:
                logger.warning("RabbitMQ connection lost (%s), reconnecting", e)
                self._close_quietly()
                self.channel = None
                try:
                    self._basic_publish(topic, body)
                except (pika.exceptions.AMQPError, RuntimeError) as retry_error:
                    raise PublishError(
                        f"RabbitMQ error publishing to {topic}: {retry_error}"
                    ) from retry_error
            except RuntimeError as e:
                raise PublishError(f"RabbitMQ unavailable for {topic}: {e}") from e
            except pika.exceptions.AMQPError as e:
                raise PublishError(f"RabbitMQ error publishing to {topic}: {e}") from e
        logger.info("Published to %s/%s", self.exchange, topic)

    def _close_quietly(self):
        try:
            self.close()
        except pika.exceptions.AMQPError as e:
            logger.debug("Ignoring error closing stale RabbitMQ connection: %s", e)

    def close(self):
        if self.connection and self.connection.is_open:
            self.connection.close()


def _rabbit_params() -> pika.ConnectionParameters:
    credentials = pika.PlainCredentials(config.RABBITMQ_USER, config.RABBITMQ_PASSWORD)
    return pika.ConnectionParameters(
        host=config.RABBITMQ_HOST, port=config.RABBITMQ_PORT,
        virtual_host=config.RABBITMQ_VHOST, credentials=credentials,
    )


def build_publisher(backend: str | None = None) -> Publisher:
    backend = backend or config.EVENT_BACKEND
    if backend == "kafka":
        return KafkaPublisher(bootstrap_servers=config.KAFKA_BOOTSTRAP)
    if backend == "rabbitmq":
        return RabbitPublisher(exchange=config.RABBITMQ_EXCHANGE)
    raise ValueError(f"Unknown event backend: {backend}")
