"""Kafka Event Publisher - aiokafka producer implementing SimulationEventSink.

Invariants:
    - Record key is the participant id (keeps one participant's events on one partition)
    - Record value is the JSON-encoded EventEnvelope
    - Headers carry event-type, event-id and participant-id for observability
    - Every send failure is raised as EventPublishError (core/errors.py)
    - stop() flushes pending records before closing the producer

Design Decisions:
    - Producer built lazily on start(): the app can boot without a reachable broker
      when kafka_enabled is False
    - Producer factory injectable: tests pass a fake with the same async surface
    - Idempotent producer with acks="all": a retried send never duplicates an event
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from aiokafka import AIOKafkaProducer

from pension_sim.config import Settings
from pension_sim.core.errors import EventPublishError, ErrorContext
from pension_sim.core.event_mapper import (
    BenefitSimulationCompletedEvent, wrap_in_envelope,
)

logger = logging.getLogger(__name__)


def _serialize_value(value: dict[str, Any]) -> bytes:
    return json.dumps(value, ensure_ascii=False).encode("utf-8")


class KafkaEventPublisher:
    """Publishes simulation events to Kafka with aiokafka."""

    def __init__(
        self,
        settings: Settings,
        producer_factory: Callable[..., Any] = AIOKafkaProducer,
    ):
        self.topic = settings.kafka_topic
        self._settings = settings
        self._producer_factory = producer_factory
        self._producer = None
        self._running = False

    async def start(self) -> None:
        """Create and start the producer."""
        if self._running:
            return
        s = self._settings
        logger.info(
            f"Creating Kafka producer with bootstrap servers: {s.kafka_bootstrap_servers}",
        )
        self._producer = self._producer_factory(
            bootstrap_servers=s.kafka_bootstrap_servers,
            client_id=s.kafka_client_id,
            acks=s.kafka_acks,
            enable_idempotence=s.kafka_enable_idempotence,
            compression_type=s.kafka_compression_type,
            linger_ms=s.kafka_linger_ms,
            request_timeout_ms=s.kafka_request_timeout_ms,
            value_serializer=_serialize_value,
        )
        await self._producer.start()
        self._running = True

    async def stop(self) -> None:
        """Flush pending records and close the producer."""
        if not self._running or not self._producer:
            return
        logger.info("Closing Kafka producer")
        try:
            await self._producer.flush()
            await self._producer.stop()
        except Exception as e:
            logger.warning(f"Error during producer shutdown: {e}")
        finally:
            self._producer = None
            self._running = False

    async def publish_simulation_completed(
        self, event: BenefitSimulationCompletedEvent,
    ) -> None:
        """Send one event and wait for the broker acknowledgement."""
        if not self._running:
            await self.start()

        envelope = wrap_in_envelope(event).model_dump(mode="json")
        headers = [
            ("event-type", event.event_type.value.encode("utf-8")),
            ("event-id", event.event_id.encode("utf-8")),
            ("participant-id", event.participant_id.encode("utf-8")),
        ]
        try:
            metadata = await self._producer.send_and_wait(
                self.topic,
                key=event.participant_id.encode("utf-8"),
                value=envelope,
                headers=headers,
            )
        except Exception as e:
            logger.error(
                f"Failed to publish event for participant: {event.participant_id}",
                extra={"participant_id": event.participant_id, "event_id": event.event_id},
                exc_info=True,
            )
            raise EventPublishError(
                str(e), ErrorContext(participant_id=event.participant_id),
            ) from e

        logger.info(
            f"Published event {event.event_id} to {metadata.topic} "
            f"partition {metadata.partition} offset {metadata.offset}",
            extra={"participant_id": event.participant_id, "event_id": event.event_id},
        )

    async def publish_batch(
        self, events: list[BenefitSimulationCompletedEvent],
    ) -> None:
        """Publish events in order; stops at the first failure."""
        logger.info(f"Publishing batch of {len(events)} events", extra={"batch_size": len(events)})
        for event in events:
            await self.publish_simulation_completed(event)
        logger.info(f"Completed publishing batch of {len(events)} events")
