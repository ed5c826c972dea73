import logging

from wallfeed.services.ingestion_service import RunReport
from wallfeed.services.polling_service import PollingService


class FlakyIngestion:
    def __init__(self):
        self.calls = 0

    async def run(self):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("boom")
        return RunReport(aborted=self.calls == 2, error="Invalid token")


async def test_loop_survives_errors_and_sleeps_between_runs():
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    ingestion = FlakyIngestion()
    service = PollingService(
        ingestion_service=ingestion,
        interval=900,
        logger=logging.getLogger("wallfeed.tests"),
        sleep=fake_sleep,
    )

    await service.run(max_runs=3)

    assert ingestion.calls == 3
    assert sleeps == [900, 900]
