"""
Services package for the Vodafone TV grabber

This package contains all fetching, mapping and output components.
"""
from vodafone_epg.services.api_client import BUCKETS, VodafoneApiClient
from vodafone_epg.services.channel_catalog_service import load_channel_catalog
from vodafone_epg.services.grabber_config_service import (
    read_grabber_config,
    select_channels,
    write_grabber_config,
)
from vodafone_epg.services.listings_service import ListingsAssembler, build_channel_record
from vodafone_epg.services.programme_mapper import map_programme
from vodafone_epg.services.xmltv_writer_service import build_document, write_document
from vodafone_epg.utils.timezone import resolve_date_window

__all__ = [
    'BUCKETS',
    'VodafoneApiClient',
    'load_channel_catalog',
    'read_grabber_config',
    'select_channels',
    'write_grabber_config',
    'ListingsAssembler',
    'build_channel_record',
    'map_programme',
    'build_document',
    'write_document',
    'resolve_date_window',
]
