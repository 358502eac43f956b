"""User profiles as seen by the social graph."""

from .models import UserProfile

__all__ = ["UserProfile"]
