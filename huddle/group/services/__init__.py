"""Service layer for the group blueprint."""

from .group_service import GroupService
from .invitations import get_join_requests, request_join, review_join_request

__all__ = ["GroupService", "get_join_requests", "request_join", "review_join_request"]
