"""Shared utilities for the field service API."""

from .config import ServiceConfig, load_service_config
from .messaging import EventPublisher, create_event_publisher
from .pagination import Page, PageResult, PageWindow, coerce_positive_int, total_pages
from .startup import database_lifespan_factory

__all__ = [
    "ServiceConfig",
    "load_service_config",
    "EventPublisher",
    "create_event_publisher",
    "Page",
    "PageResult",
    "PageWindow",
    "coerce_positive_int",
    "total_pages",
    "database_lifespan_factory",
]
