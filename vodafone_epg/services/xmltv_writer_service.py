"""
XMLTV Writer Service

Serializes channel and programme records into an XMLTV listings document.
"""
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO
import logging

from lxml import etree # type: ignore

from vodafone_epg.errors import EncodingError
from vodafone_epg.services.fetch_types import ChannelRecord, ProgrammeImage, ProgrammeRecord

logger = logging.getLogger(__name__)

XMLTV_DOCTYPE = '<!DOCTYPE tv SYSTEM "xmltv.dtd">'
IMAGE_SIZE_LARGE = "3"


def build_document(
    channels: Iterable[ChannelRecord],
    programmes: Iterable[ProgrammeRecord],
    *,
    generator_name: str,
    source_url: str,
    image_system: str,
) -> etree._Element:
    """
    Build the XMLTV <tv> element.

    Channels are written first, then programmes in the order given.

    Args:
        channels: Channel records
        programmes: Programme records, grouped by channel
        generator_name: generator-info-name attribute
        source_url: source-info-url attribute
        image_system: system attribute for programme images

    Returns:
        Root <tv> element

    Raises:
        EncodingError: If a value holds characters XML cannot represent
    """
    root = etree.Element("tv")
    root.set("source-info-url", source_url)
    root.set("source-info-name", "Vodafone TV")
    root.set("generator-info-name", generator_name)

    channel_count = 0
    for channel in channels:
        root.append(_checked(_build_channel, channel, channel.id))
        channel_count += 1

    programme_count = 0
    for programme in programmes:
        root.append(_checked(_build_programme, programme, programme.channel_id, image_system))
        programme_count += 1

    logger.debug(f"Built XMLTV document: {channel_count} channels, {programme_count} programmes")
    return root


def serialize_document(root: etree._Element) -> bytes:
    """Serialize the <tv> element with XML declaration and DOCTYPE"""
    return etree.tostring(
        etree.ElementTree(root),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
        doctype=XMLTV_DOCTYPE,
    )


def write_document(root: etree._Element, destination: Path | str | BinaryIO) -> None:
    """
    Write the document to a file path or binary stream.

    Raises:
        OSError: If the output file cannot be written
    """
    payload = serialize_document(root)
    if isinstance(destination, (str, Path)):
        path = Path(destination)
        path.write_bytes(payload)
        logger.info(f"Wrote {len(payload) / 1024:.1f} KB of listings to {path}")
        return

    destination.write(payload)
    destination.flush()


def _checked(build, record, label: str, *args) -> etree._Element:
    """Run an element builder, reporting text lxml refuses as EncodingError"""
    try:
        return build(record, *args)
    except ValueError as e:
        raise EncodingError(f"Text for {label} is not XML compatible: {e}") from e


def _build_channel(channel: ChannelRecord) -> etree._Element:
    """Build a single <channel> element"""
    element = etree.Element("channel", id=channel.id)
    for text, lang in channel.display_names:
        _sub_text(element, "display-name", text, lang=lang)
    if channel.icon_url:
        etree.SubElement(element, "icon", src=channel.icon_url)
    return element


def _build_programme(programme: ProgrammeRecord, image_system: str) -> etree._Element:
    """Build a single <programme> element, children in DTD order"""
    element = etree.Element(
        "programme",
        start=programme.start,
        stop=programme.stop,
        channel=programme.channel_id,
    )

    title, title_lang = programme.title
    _sub_text(element, "title", title, lang=title_lang)

    if programme.description:
        desc, desc_lang = programme.description
        _sub_text(element, "desc", desc, lang=desc_lang)

    if programme.directors or programme.actors:
        credits = etree.SubElement(element, "credits")
        for director in programme.directors:
            _sub_text(credits, "director", director)
        for actor in programme.actors:
            _sub_text(credits, "actor", actor)

    if programme.year:
        _sub_text(element, "date", programme.year)

    for category, category_lang in programme.categories:
        _sub_text(element, "category", category, lang=category_lang)

    if programme.length_seconds is not None:
        _sub_text(element, "length", str(programme.length_seconds), units="seconds")

    if programme.icon:
        icon = etree.SubElement(element, "icon", src=programme.icon.url)
        if programme.icon.width and programme.icon.height:
            icon.set("width", str(programme.icon.width))
            icon.set("height", str(programme.icon.height))

    if programme.country:
        _sub_text(element, "country", programme.country)

    if programme.episode_num:
        _sub_text(element, "episode-num", programme.episode_num.xmltv_ns, system="xmltv_ns")
        _sub_text(element, "episode-num", programme.episode_num.onscreen, system="onscreen")

    if programme.rating:
        value, system = programme.rating
        rating = etree.SubElement(element, "rating", system=system)
        _sub_text(rating, "value", value)

    for image in programme.images:
        _build_image(element, image, image_system)

    return element


def _build_image(parent: etree._Element, image: ProgrammeImage, image_system: str) -> None:
    element = _sub_text(parent, "image", image.url)
    if image.type:
        element.set("type", image.type)
        element.set("size", IMAGE_SIZE_LARGE)
    if image.orient:
        element.set("orient", image.orient)
    element.set("system", image_system)


def _sub_text(parent: etree._Element, tag: str, text: str, **attrs: str) -> etree._Element:
    """Append a child element with text and optional attributes"""
    child = etree.SubElement(parent, tag)
    child.text = text
    for name, value in attrs.items():
        child.set(name, value)
    return child
