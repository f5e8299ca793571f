"""
The orchestrator for one pass: download every subscription, then organize it.
"""

import logging
from pathlib import Path

from rich.markup import escape

from ytsub.exceptions import DownloadError
from ytsub.media import Downloader, Organizer
from ytsub.models.stats import PassStats
from ytsub.models.subscription import Subscription
from ytsub.storage.config_manager import ConfigManager
from ytsub.utils.formatting import format_duration, pluralize
from ytsub.utils.path import create_dir, safe_dir_name
from ytsub.utils.structured_logger import PassLogger

log = logging.getLogger(__name__)


class SubscriptionRunner:
    """
    Runs passes over the subscriptions file.

    Everything is strictly sequential: subscriptions in file order, and within a
    subscription one URL at a time.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        downloader: Downloader,
        organizer: Organizer,
        events: PassLogger | None = None,
    ):
        self.config_manager = config_manager
        self.downloader = downloader
        self.organizer = organizer
        self.events = events or PassLogger()
        self.last_stats: PassStats | None = None

    @property
    def base_dir(self) -> Path:
        return self.config_manager.subscriptions_file_path.parent

    def output_dir_for(self, subscription: Subscription) -> Path:
        return self.base_dir / safe_dir_name(subscription.name)

    async def run_pass(self) -> PassStats:
        """Reloads the subscriptions file and processes every subscription."""
        subscription_set = await self.config_manager.load_subscriptions()
        stats = PassStats()
        self.events.pass_started(
            len(subscription_set.subscriptions), subscription_set.total_urls
        )

        if not subscription_set.subscriptions:
            log.info("No subscriptions defined. Nothing to do.")

        for subscription in subscription_set.subscriptions:
            await self.process_subscription(subscription, stats)

        stats.finish()
        self.last_stats = stats
        self.events.pass_completed(
            stats.duration,
            stats.urls_succeeded,
            stats.urls_failed,
            stats.files_moved,
            stats.files_failed,
        )
        log.info(
            f"[bold]Pass finished[/bold] in {format_duration(stats.duration)}: "
            f"{pluralize(stats.urls_succeeded, 'URL')} ok, "
            f"{stats.urls_failed} failed, {pluralize(stats.files_moved, 'file')} moved."
        )
        return stats

    async def process_subscription(self, subscription: Subscription, stats: PassStats):
        """Downloads each URL of a subscription in order, then organizes its folder."""
        output_dir = self.output_dir_for(subscription)
        await create_dir(output_dir)
        stats.subscriptions += 1
        log.info(f"\n[bold cyan]▶ {escape(subscription.name)}[/bold cyan]")

        for url in subscription.urls:
            try:
                await self.downloader.download(url, output_dir, subscription.arguments)
            except DownloadError as e:
                log.error(f"[red]✗ {escape(str(e))}[/red]")
                stats.urls_failed += 1
                stats.failed_urls.append(url)
                self.events.download_failed(subscription.name, url, e.reason, e.returncode)
                continue
            stats.urls_succeeded += 1
            self.events.download_completed(subscription.name, url)

        result = await self.organizer.organize(output_dir, subscription.organize_rules)
        stats.record_organize(result)
        for filename, destination in result.moved:
            self.events.file_moved(subscription.name, filename, destination)
        for filename in result.failed:
            self.events.file_move_failed(subscription.name, filename)
