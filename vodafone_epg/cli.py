"""
Command line entry point

Implements the XMLTV grabber conventions: --configure writes the channel
selection, a plain run writes listings for the configured channels.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from vodafone_epg import __version__
from vodafone_epg.config import GRABBER_NAME, settings, setup_logging
from vodafone_epg.errors import ConfigurationError, VodafoneEPGError
from vodafone_epg.services import (
    ListingsAssembler,
    VodafoneApiClient,
    build_channel_record,
    build_document,
    load_channel_catalog,
    read_grabber_config,
    resolve_date_window,
    select_channels,
    write_document,
    write_grabber_config,
)
from vodafone_epg.utils.logging_helpers import log_section_end, log_section_start


logger = logging.getLogger(__name__)

CAPABILITIES = ("baseline", "manualconfig")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=GRABBER_NAME,
        description="Grab TV listings for Portugal from Vodafone TV in XMLTV format.",
    )
    parser.add_argument("--configure", action="store_true", help="Choose channels and write the configuration file")
    parser.add_argument("--config-file", type=Path, default=None,
                        help=f"Configuration file (default: {settings.default_config_file})")
    parser.add_argument("--days", type=int, default=settings.default_days,
                        help=f"Days of listings to grab (max {settings.max_days}, default: %(default)s)")
    parser.add_argument("--offset", type=int, default=0, help="Start N days from today (default: %(default)s)")
    parser.add_argument("--output", type=Path, help="Write listings to FILE instead of stdout")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--debug", action="store_true", help="Log every request")
    parser.add_argument("--list-channels", action="store_true", help="Write all available channels as XMLTV")
    parser.add_argument("--capabilities", action="store_true", help="Print grabber capabilities")
    parser.add_argument("--version", action="store_true", help="Print version")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the grabber.

    Returns:
        Process exit code: 0 on success, 1 on any grabber error
    """
    args = build_parser().parse_args(argv)

    if args.debug:
        setup_logging("DEBUG")
    elif args.quiet:
        setup_logging("WARNING")
    else:
        setup_logging()

    if args.version:
        print(f"{GRABBER_NAME} {__version__}")
        return 0

    if args.capabilities:
        print("\n".join(CAPABILITIES))
        return 0

    config_path = args.config_file or settings.default_config_file

    try:
        catalog = load_channel_catalog(settings.channels_file)

        if args.configure:
            return _configure(catalog, config_path)

        if args.list_channels:
            return _list_channels(catalog, args.output)

        return _grab(catalog, config_path, args.offset, args.days, args.output)

    except VodafoneEPGError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


def _configure(catalog, config_path: Path) -> int:
    log_section_start(logger, "channel configuration")
    selected = select_channels(catalog)
    write_grabber_config(config_path, selected)
    log_section_end(logger, "channel configuration")
    return 0


def _list_channels(catalog, output: Path | None) -> int:
    channels = []
    for entry in catalog.values():
        try:
            channels.append(build_channel_record(entry, settings.channel_id_suffix))
        except ConfigurationError as e:
            logger.warning(str(e))

    root = build_document(
        channels,
        [],
        generator_name=GRABBER_NAME,
        source_url=settings.base_url,
        image_system=settings.image_system,
    )
    write_document(root, output or sys.stdout.buffer)
    return 0


def _grab(catalog, config_path: Path, offset: int, days: int, output: Path | None) -> int:
    channel_keys = read_grabber_config(config_path)
    window = resolve_date_window(offset, days, settings.max_days)

    log_section_start(logger, "listings grab")
    with VodafoneApiClient(
        settings.base_url,
        timeout=settings.request_timeout_sec,
        delay=settings.request_delay_sec,
        user_agent=settings.user_agent,
    ) as client:
        assembler = ListingsAssembler(client, catalog, channel_id_suffix=settings.channel_id_suffix)
        result = assembler.run(channel_keys, window)

    root = build_document(
        result.channels.values(),
        result.iter_programmes(),
        generator_name=GRABBER_NAME,
        source_url=settings.base_url,
        image_system=settings.image_system,
    )
    write_document(root, output or sys.stdout.buffer)
    log_section_end(logger, "listings grab")
    return 0


def run() -> None:
    """Console script entry point"""
    sys.exit(main())
