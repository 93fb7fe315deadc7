"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import date, datetime, timezone


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_day_processing(logger: logging.Logger, idx: int, total: int, day: date) -> None:
    """
    Log day processing header.

    Args:
        logger: Logger instance
        idx: Current day index (1-based)
        total: Total number of days
        day: Calendar day being fetched
    """
    logger.info(f"Processing day {idx}/{total}: {day.isoformat()}")


def log_grab_start(logger: logging.Logger) -> None:
    """Log listings grab start."""
    logger.info(f"Listings grab started at {datetime.now(timezone.utc).isoformat()}")


def log_grab_end(logger: logging.Logger) -> None:
    """Log listings grab end."""
    logger.info(f"Listings grab completed at {datetime.now(timezone.utc).isoformat()}")


def log_listings_summary(
    logger: logging.Logger,
    channels_count: int,
    programmes_count: int,
    skipped_buckets: int
) -> None:
    """
    Log assembled listings summary.

    Args:
        logger: Logger instance
        channels_count: Number of channels emitted
        programmes_count: Number of deduplicated programmes
        skipped_buckets: Number of requests that returned no data
    """
    logger.info(
        f"Listings summary - Channels: {channels_count}, Programmes: {programmes_count}, "
        f"Empty buckets: {skipped_buckets}"
    )
