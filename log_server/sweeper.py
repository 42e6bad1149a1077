"""Background job that purges expired read state between requests."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from log_server.reader import IncrementalLogReader

logger = logging.getLogger(__name__)


def start_sweeper(reader: IncrementalLogReader, interval_seconds: float) -> BackgroundScheduler | None:
    """Run ``reader.sweep`` every *interval_seconds*. Returns None if disabled."""
    if interval_seconds <= 0:
        logger.info("Background sweep disabled")
        return None

    scheduler = BackgroundScheduler()
    scheduler.add_job(reader.sweep, "interval", seconds=interval_seconds, id="sweep-read-state")
    scheduler.start()
    logger.info("Background sweep every %.1fs", interval_seconds)
    return scheduler
