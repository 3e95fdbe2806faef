"""Realtime notification helpers for the infrastructure layer."""

from .manager import ConnectionManager, connection_manager
from .publisher import (
    RealtimePublisher,
    dispatch_message,
    dispatch_notification,
    realtime_publisher,
    serialize_message,
    serialize_notification,
)

__all__ = [
    "ConnectionManager",
    "connection_manager",
    "RealtimePublisher",
    "realtime_publisher",
    "dispatch_message",
    "dispatch_notification",
    "serialize_message",
    "serialize_notification",
]
