"""
Module: utils
Description: Package initialization for utility functions.

Shared helpers used throughout the adapter:
- logger: Structured logging configuration and helpers
- metrics: CloudWatch metrics publishing
"""

__all__ = []
