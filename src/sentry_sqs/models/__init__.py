"""
Module: models
Description: Package initialization for Pydantic data models.

- DeliveryTask: Queue payload for one captured Sentry envelope
"""

from .task import DeliveryTask

__all__ = [
    "DeliveryTask",
]
