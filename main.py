# main.py
import sys
import asyncio

if sys.platform.startswith("win"):
    from asyncio import WindowsSelectorEventLoopPolicy
    asyncio.set_event_loop_policy(WindowsSelectorEventLoopPolicy())

from wallfeed.di import bot, db_client, ingestion_service, polling_service


async def main():
    try:
        if "--loop" in sys.argv[1:]:
            await polling_service.run()
            return 0
        report = await ingestion_service.run()
        return 1 if report.aborted else 0
    finally:
        if bot is not None:
            await bot.session.close()
        db_client.close()

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
