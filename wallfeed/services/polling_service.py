# wallfeed/services/polling_service.py
import asyncio


class PollingService:
    """Повторяет проход ingestion каждые interval секунд."""

    def __init__(self, *, ingestion_service, interval, logger, sleep=asyncio.sleep):
        self.ingestion = ingestion_service
        self.interval = interval
        self.logger = logger
        self.sleep = sleep
        self._running = False

    async def run(self, max_runs=None):
        self._running = True
        runs = 0
        while self._running:
            try:
                report = await self.ingestion.run()
                if report.aborted:
                    self.logger.error("Прогон прерван: %s", report.error)
            except Exception as e:
                self.logger.error(f"Ошибка в PollingService: {e}", exc_info=True)

            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            await self.sleep(self.interval)
        self._running = False

    def stop(self):
        self._running = False
