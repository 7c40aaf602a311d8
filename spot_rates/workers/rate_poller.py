import asyncio
import logging
import signal
import sys
from datetime import datetime

from spot_rates.cache.redis_cache import RedisRateCache
from spot_rates.config.settings import get_settings
from spot_rates.domain.exceptions import CacheError, ConfigurationError
from spot_rates.monitoring.logger import setup_logging
from spot_rates.services.rate_provider import ExchangeRateProvider
from spot_rates.services.service_factory import ServiceFactory

logger = logging.getLogger(__name__)


class RatePollerWorker:
    """
    Background worker that keeps every provider's rate set fresh.

    Each provider runs its own loop on its own refresh interval, so a slow
    venue never delays the others.
    """
    def __init__(
            self,
            providers: dict[str, ExchangeRateProvider],
            rate_cache: RedisRateCache | None = None,
    ):
        """
        Args:
            providers: provider name -> provider instance
            rate_cache: where snapshots are published after each cycle, if anywhere
        """
        self.providers = providers
        self.rate_cache = rate_cache
        self.is_running = False

        logger.info(f"Initialized RatePollerWorker for providers: {list(providers)}")

    async def refresh(self, provider: ExchangeRateProvider) -> int:
        """
        One cycle for one provider: poll, drop stale rates, publish.
        Returns the number of rates published.
        """
        await provider.poll()
        provider.prune_stale()
        rates = provider.get() or frozenset()

        if self.rate_cache is not None:
            try:
                await self.rate_cache.set_rates(provider.name, rates)
            except CacheError as e:
                logger.error(f"Failed to publish {provider.name} rates: {e}")

        return len(rates)

    async def run_provider(self, provider: ExchangeRateProvider):
        interval = provider.config.refresh_interval.total_seconds()
        cycle_count = 0

        while self.is_running:
            cycle_count += 1
            cycle_start = datetime.now()
            try:
                published = await self.refresh(provider)
                cycle_duration = (datetime.now() - cycle_start).total_seconds()
                logger.info(
                    f"{provider.name} cycle #{cycle_count} completed in {cycle_duration:.2f}s: "
                    f"{published} rates published"
                )
            except asyncio.CancelledError:
                logger.info(f"{provider.name} loop received cancellation signal")
                raise
            except Exception as e:
                logger.error(f"{provider.name} cycle #{cycle_count} failed: {e}", exc_info=True)

            await asyncio.sleep(interval)

    async def run(self):
        """
        Main worker loop. Runs until stopped or cancelled.
        """
        self.is_running = True
        logger.info("Rate Poller Worker started")

        tasks = [
            asyncio.create_task(self.run_provider(provider), name=f"poll-{name}")
            for name, provider in self.providers.items()
        ]
        try:
            while self.is_running:
                await asyncio.sleep(1)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Rate Poller Worker stopped")

    def stop(self):
        """Gracefully stop the worker"""
        logger.info("Stopping Rate Poller Worker...")
        self.is_running = False


async def main():
    """Entry point for running the worker."""
    settings = get_settings()
    setup_logging(settings.LOG_DIRECTORY, settings.LOG_LEVEL)

    logger.info("=" * 60)
    logger.info("RATE POLLER WORKER STARTING")
    logger.info("=" * 60)
    logger.info(f"Enabled providers: {settings.enabled_providers}")
    logger.info(f"Stale price interval: {settings.STALE_PRICE_INTERVAL_SECONDS}s")
    logger.info("=" * 60)

    service_factory = ServiceFactory(settings)
    try:
        providers = service_factory.create_providers()
    except ConfigurationError as e:
        logger.error(f"Invalid worker configuration: {e}")
        await service_factory.cleanup()
        sys.exit(1)

    worker = RatePollerWorker(providers=providers, rate_cache=service_factory.create_rate_cache())

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, worker.stop)

    try:
        await worker.run()
    finally:
        await service_factory.cleanup()
        logger.info("Cleanup completed")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
