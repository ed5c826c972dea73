# wallfeed/services/notify_service.py
import logging


class AdminNotifier:
    """
    Уведомления администраторам в личку Telegram.
    Fire-and-forget: любые ошибки отправки только логируются.
    """

    def __init__(self, *, bot, admin_ids, logger: logging.Logger):
        self.bot = bot
        self.admin_ids = list(admin_ids or [])
        self.logger = logger

    async def notify(self, text: str) -> int:
        self.logger.warning("Admin notification: %s", text)
        if self.bot is None or not self.admin_ids:
            return 0

        sent = 0
        for uid in self.admin_ids:
            try:
                await self.bot.send_message(chat_id=uid, text=f"⚠️ {text}")
                sent += 1
            except Exception as e:
                self.logger.error("Не удалось уведомить администратора %s: %s", uid, e)
        return sent
