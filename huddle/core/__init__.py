"""Core module for the huddle application."""

from .types import APIResponse, Record, as_datetime, utcnow

__all__ = ["Record", "APIResponse", "as_datetime", "utcnow"]
