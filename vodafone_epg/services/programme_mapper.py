"""
Programme mapping

Translates one provider programme object into a ProgrammeRecord ready for
the XMLTV writer.
"""
import logging
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from vodafone_epg.schemas import ApiImage, ApiProgramme
from vodafone_epg.services.fetch_types import EpisodeNumber, ProgrammeImage, ProgrammeRecord
from vodafone_epg.utils.text import sanitize_text
from vodafone_epg.utils.timezone import DateFormatError, epoch_to_xmltv, parse_iso8601_duration


logger = logging.getLogger(__name__)

LANGUAGE = "pt"
RATING_SYSTEM = "Portuguese Movie Rating"
IMAGE_QUALITY = 95

# imageTypeName -> (XMLTV image type, orientation, width, height)
IMAGE_TYPES: dict[str, tuple[str, str, int, int]] = {
    "cc": ("still", "L", 640, 360),
    "ca": ("poster", "P", 360, 640),
    "bg": ("backdrop", "L", 640, 360),
}

# Tag and meta names used by the provider
TAG_GENRE = "genre"
TAG_COUNTRY = "country of production"
TAG_PARENTAL_RATING = "parental Rating"
TAG_ACTORS = "actors"
TAG_DIRECTOR = "director"
META_DURATION = "display duration"
META_YEAR = "year"
META_SEASON = "season number"
META_EPISODE = "episode num"


def map_programme(
    data: dict,
    channel_id: str,
    requested_date: date | None = None
) -> Optional[ProgrammeRecord]:
    """
    Map a provider programme object to a ProgrammeRecord.

    Args:
        data: Programme object from result.objects
        channel_id: XMLTV ID of the channel the programme belongs to
        requested_date: Day the programme was requested for (logging only)

    Returns:
        ProgrammeRecord, or None if the object lacks a title or valid times

    Raises:
        EncodingError: If any text cannot be strictly encoded as UTF-8
    """
    try:
        programme = ApiProgramme.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Skipping malformed programme on {channel_id} ({requested_date}): "
            f"{e.error_count()} validation errors"
        )
        logger.debug(f"Validation details: {e.errors()}")
        return None

    try:
        start = epoch_to_xmltv(programme.start_date)
        stop = epoch_to_xmltv(programme.end_date)
    except DateFormatError as e:
        logger.warning(f"Skipping programme '{programme.name}' on {channel_id}: {e}")
        return None

    images = map_images(programme.images)

    return ProgrammeRecord(
        channel_id=channel_id,
        start=start,
        stop=stop,
        title=(sanitize_text(programme.name), LANGUAGE),
        description=(sanitize_text(programme.description), LANGUAGE) if programme.description else None,
        year=_optional_text(programme.meta_value(META_YEAR)),
        episode_num=map_episode_number(
            programme.meta_value(META_SEASON),
            programme.meta_value(META_EPISODE),
        ),
        length_seconds=_map_length(programme.meta_value(META_DURATION)),
        icon=select_icon(programme.images),
        categories=[(sanitize_text(genre), LANGUAGE) for genre in programme.tag_values(TAG_GENRE) or []],
        country=_first_text(programme.tag_values(TAG_COUNTRY)),
        rating=map_rating(programme.tag_first_value(TAG_PARENTAL_RATING)),
        images=images,
        actors=[sanitize_text(actor) for actor in programme.tag_values(TAG_ACTORS) or []],
        directors=[sanitize_text(director) for director in programme.tag_values(TAG_DIRECTOR) or []],
    )


def map_rating(value: Any) -> tuple[str, str] | None:
    """
    Map the first parental rating tag value to an XMLTV rating.

    0 means suitable for all ages; any other value N becomes 'M/N'.
    """
    if value is None or value == "":
        return None

    age = _as_int(value)
    if age == 0:
        return ("All Ages", RATING_SYSTEM)
    return (f"M/{age if age is not None else sanitize_text(value)}", RATING_SYSTEM)


def map_episode_number(season_value: Any, episode_value: Any) -> EpisodeNumber | None:
    """
    Build episode numbering from 1-based provider season and episode values.

    Returns:
        EpisodeNumber with the zero-based xmltv_ns form ('2.4.') and the
        1-based onscreen form ('3 5'), or None if neither value is known
    """
    season = _as_int(season_value)
    episode = _as_int(episode_value)
    if season is None and episode is None:
        return None

    xmltv_ns = f"{season - 1 if season is not None else ''}."
    if episode is not None:
        xmltv_ns += f"{episode - 1}."

    onscreen = " ".join(str(n) for n in (season, episode) if n is not None)
    return EpisodeNumber(xmltv_ns=xmltv_ns, onscreen=onscreen)


def map_images(images: list[ApiImage]) -> list[ProgrammeImage]:
    """Classify and size every image that carries a URL"""
    mapped = []
    for image in images:
        if not image.url:
            continue
        known = IMAGE_TYPES.get(image.image_type_name or "")
        if known is None:
            mapped.append(ProgrammeImage(url=image.url))
            continue
        image_type, orient, width, height = known
        mapped.append(ProgrammeImage(
            url=sized_image_url(image.url, width, height),
            type=image_type,
            orient=orient,
            width=width,
            height=height,
        ))
    return mapped


def select_icon(images: list[ApiImage]) -> ProgrammeImage | None:
    """First poster image, falling back to the first still"""
    for type_name in ("ca", "cc"):
        for image in images:
            if image.url and image.image_type_name == type_name:
                image_type, orient, width, height = IMAGE_TYPES[type_name]
                return ProgrammeImage(
                    url=sized_image_url(image.url, width, height),
                    type=image_type,
                    orient=orient,
                    width=width,
                    height=height,
                )
    return None


def sized_image_url(url: str, width: int, height: int) -> str:
    return f"{url}/width/{width}/height/{height}/quality/{IMAGE_QUALITY}"


def _map_length(value: Any) -> int | None:
    if value is None:
        return None
    seconds = parse_iso8601_duration(str(value))
    if seconds is None:
        logger.debug(f"Ignoring unparsable duration {value!r}")
    return seconds


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return sanitize_text(value)


def _first_text(values: list[Any] | None) -> str | None:
    if not values:
        return None
    return _optional_text(values[0])


def _as_int(value: Any) -> int | None:
    """Integer form of a provider number, or None"""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None
