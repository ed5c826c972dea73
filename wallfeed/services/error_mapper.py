# wallfeed/services/error_mapper.py
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from wallfeed.services.errors import VkApiError

INVALID_TOKEN = 5

VK_ERRORS: Mapping[int, str] = MappingProxyType({
    5:   "Invalid token",
    6:   "Too many requests",
    15:  "Access denied",
    30:  "Profile is private",
    100: "Invalid parameter",
    113: "Invalid user ID",
    200: "Access denied",
})


class VkErrorMapper:
    """Конверт {"error": {...}} → VkApiError с человекочитаемым текстом."""

    def __init__(self, messages: Mapping[int, str] = VK_ERRORS, overrides: Optional[Mapping[int, str]] = None):
        self.messages = MappingProxyType({**messages, **(overrides or {})})

    def to_error(self, envelope: Mapping) -> VkApiError:
        try:
            code = int(envelope.get("error_code"))
        except (TypeError, ValueError):
            code = 0
        message = self.messages.get(code) or str(envelope.get("error_msg") or "Unknown error")
        return VkApiError(code, message)

    @staticmethod
    def needs_admin(error: VkApiError) -> bool:
        return error.code == INVALID_TOKEN
