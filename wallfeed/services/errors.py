# wallfeed/services/errors.py


class FetchError(Exception):
    """VK недоступен после всех попыток (сеть, таймаут, HTTP-статус)."""


class VkApiError(Exception):
    """Ответ пришёл, но в нём конверт {"error": {...}}."""

    def __init__(self, code: int, message: str):
        super().__init__(f"VK API Error [{code}]: {message}")
        self.code = code
        self.message = message


class PostSkipped(Exception):
    """Пост не даёт записи (реклама, пустой текст...). Не ошибка."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
