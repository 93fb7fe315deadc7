"""
Unit tests for mapping provider programme objects.
"""
import pytest

from vodafone_epg.errors import EncodingError
from vodafone_epg.services.programme_mapper import (
    RATING_SYSTEM,
    map_episode_number,
    map_programme,
    map_rating,
)

CHANNEL_ID = "canalabc.tv.vodafone.pt"


def minimal(**extra) -> dict:
    data = {"name": "Show", "startDate": 1700000000, "endDate": 1700003600}
    data.update(extra)
    return data


# ---------------------------------------------------------------------------
# Required fields
# ---------------------------------------------------------------------------


def test_minimal_programme():
    programme = map_programme(minimal(description="A show"), CHANNEL_ID)
    assert programme.channel_id == CHANNEL_ID
    assert programme.start == "20231114221320 +0000"
    assert programme.stop == "20231114231320 +0000"
    assert programme.title == ("Show", "pt")
    assert programme.description == ("A show", "pt")


def test_minimal_programme_has_no_optional_fields():
    programme = map_programme(minimal(), CHANNEL_ID)
    assert programme.description is None
    assert programme.year is None
    assert programme.episode_num is None
    assert programme.length_seconds is None
    assert programme.icon is None
    assert programme.categories == []
    assert programme.country is None
    assert programme.rating is None
    assert programme.images == []
    assert programme.actors == []
    assert programme.directors == []


def test_missing_start_is_skipped():
    assert map_programme({"name": "Show", "endDate": 1700003600}, CHANNEL_ID) is None


def test_missing_title_is_skipped():
    assert map_programme({"startDate": 1700000000, "endDate": 1700003600}, CHANNEL_ID) is None


def test_null_containers_are_absent():
    programme = map_programme(minimal(tags=None, metas=None, images=None), CHANNEL_ID)
    assert programme.categories == []
    assert programme.images == []


def test_title_control_characters_removed():
    assert map_programme(minimal(name="Show\x07\n"), CHANNEL_ID).title == ("Show", "pt")


# ---------------------------------------------------------------------------
# Optional fields
# ---------------------------------------------------------------------------


def test_full_programme(sample_programme):
    programme = map_programme(sample_programme, CHANNEL_ID)
    assert programme.categories == [("Drama", "pt"), ("Música", "pt")]
    assert programme.country == "Portugal"
    assert programme.rating == ("M/12", RATING_SYSTEM)
    assert programme.year == "2013"
    assert programme.length_seconds == 3600
    assert programme.actors == ["Ana Moreira", "Rui Unas"]
    assert programme.directors == ["Patrícia Sequeira"]
    assert programme.episode_num.xmltv_ns == "2.4."
    assert programme.episode_num.onscreen == "3 5"


def test_images_classified_and_sized(sample_programme):
    images = map_programme(sample_programme, CHANNEL_ID).images
    assert [(i.type, i.orient, i.width, i.height) for i in images] == [
        ("still", "L", 640, 360),
        ("poster", "P", 360, 640),
        ("backdrop", "L", 640, 360),
    ]
    assert images[0].url == "https://img.example.test/still/width/640/height/360/quality/95"
    assert images[1].url == "https://img.example.test/poster/width/360/height/640/quality/95"


def test_unknown_image_type_left_unclassified():
    images = map_programme(
        minimal(images=[{"url": "https://img.example.test/x", "imageTypeName": "zz"}]),
        CHANNEL_ID,
    ).images
    assert len(images) == 1
    assert images[0].url == "https://img.example.test/x"
    assert images[0].type is None
    assert images[0].orient is None


def test_images_without_url_ignored():
    programme = map_programme(
        minimal(images=[{"url": "", "imageTypeName": "ca"}, {"imageTypeName": "cc"}]),
        CHANNEL_ID,
    )
    assert programme.images == []
    assert programme.icon is None


def test_icon_prefers_poster(sample_programme):
    icon = map_programme(sample_programme, CHANNEL_ID).icon
    assert icon.url == "https://img.example.test/poster/width/360/height/640/quality/95"
    assert (icon.width, icon.height) == (360, 640)


def test_icon_falls_back_to_still():
    icon = map_programme(
        minimal(images=[
            {"url": "https://img.example.test/bg", "imageTypeName": "bg"},
            {"url": "https://img.example.test/still", "imageTypeName": "cc"},
        ]),
        CHANNEL_ID,
    ).icon
    assert icon.url == "https://img.example.test/still/width/640/height/360/quality/95"


def test_icon_absent_with_backdrop_only():
    programme = map_programme(
        minimal(images=[{"url": "https://img.example.test/bg", "imageTypeName": "bg"}]),
        CHANNEL_ID,
    )
    assert programme.icon is None
    assert len(programme.images) == 1


def test_unparsable_duration_omitted():
    programme = map_programme(minimal(metas={"display duration": {"value": "90 min"}}), CHANNEL_ID)
    assert programme.length_seconds is None


def test_genre_tag_without_objects():
    programme = map_programme(minimal(tags={"genre": {"objects": []}}), CHANNEL_ID)
    assert programme.categories == []


# ---------------------------------------------------------------------------
# Rating
# ---------------------------------------------------------------------------


def test_rating_zero_is_all_ages():
    assert map_rating(0) == ("All Ages", "Portuguese Movie Rating")


def test_rating_value_prefixed():
    assert map_rating(12) == ("M/12", "Portuguese Movie Rating")
    assert map_rating("16") == ("M/16", "Portuguese Movie Rating")


def test_rating_missing():
    assert map_rating(None) is None
    assert map_rating("") is None


def test_rating_float_written_as_integer():
    assert map_rating(12.0) == ("M/12", "Portuguese Movie Rating")
    assert map_rating("0.0") == ("All Ages", "Portuguese Movie Rating")


def test_rating_uses_first_tag_object():
    programme = map_programme(
        minimal(tags={"parental Rating": {"objects": [{"value": None}, {"value": 16}]}}),
        CHANNEL_ID,
    )
    assert programme.rating is None


def test_rating_tag_from_programme():
    programme = map_programme(
        minimal(tags={"parental Rating": {"objects": [{"value": 0}, {"value": 16}]}}),
        CHANNEL_ID,
    )
    assert programme.rating == ("All Ages", "Portuguese Movie Rating")


# ---------------------------------------------------------------------------
# Episode numbering
# ---------------------------------------------------------------------------


def test_episode_season_only():
    episode = map_episode_number(3, None)
    assert episode.xmltv_ns == "2."
    assert episode.onscreen == "3"


def test_episode_season_and_episode():
    episode = map_episode_number(3, 5)
    assert episode.xmltv_ns == "2.4."
    assert episode.onscreen == "3 5"


def test_episode_numbers_as_strings():
    episode = map_episode_number("1", "10")
    assert episode.xmltv_ns == "0.9."
    assert episode.onscreen == "1 10"


def test_episode_only():
    episode = map_episode_number(None, 5)
    assert episode.xmltv_ns == ".4."
    assert episode.onscreen == "5"


def test_episode_neither():
    assert map_episode_number(None, None) is None
    assert map_episode_number("n/a", None) is None


def test_programme_without_episode_metas():
    assert map_programme(minimal(metas={"year": {"value": 2001}}), CHANNEL_ID).episode_num is None


def test_unencodable_tag_value_raises():
    with pytest.raises(EncodingError):
        map_programme(minimal(tags={"actors": {"objects": [{"value": "Ana \ud800"}]}}), CHANNEL_ID)


# ---------------------------------------------------------------------------
# Null and malformed fields
# ---------------------------------------------------------------------------


def test_null_tag_group_leaves_other_tags():
    programme = map_programme(
        minimal(tags={"genre": None, "actors": {"objects": [{"value": "Ana Moreira"}]}}),
        CHANNEL_ID,
    )
    assert programme.categories == []
    assert programme.actors == ["Ana Moreira"]


def test_null_tag_objects_and_entries_ignored():
    programme = map_programme(
        minimal(tags={
            "genre": {"objects": None},
            "actors": {"objects": [None, {"value": "Rui Unas"}, "junk"]},
        }),
        CHANNEL_ID,
    )
    assert programme.categories == []
    assert programme.actors == ["Rui Unas"]


def test_null_meta_leaves_other_metas():
    programme = map_programme(
        minimal(metas={"year": None, "season number": {"value": 2}}),
        CHANNEL_ID,
    )
    assert programme.year is None
    assert programme.episode_num.xmltv_ns == "1."


def test_null_image_entries_ignored():
    programme = map_programme(
        minimal(images=[None, {"url": "https://img.example.test/poster", "imageTypeName": "ca"}, 7]),
        CHANNEL_ID,
    )
    assert [image.type for image in programme.images] == ["poster"]
    assert programme.icon is not None


def test_non_text_image_url_ignored():
    programme = map_programme(minimal(images=[{"url": 42, "imageTypeName": "ca"}]), CHANNEL_ID)
    assert programme.images == []


def test_non_mapping_containers_ignored():
    programme = map_programme(minimal(tags=["genre"], metas="year", images={"url": "x"}), CHANNEL_ID)
    assert programme.title == ("Show", "pt")
    assert programme.categories == []
    assert programme.images == []


def test_xml_noncharacters_removed_from_title():
    assert map_programme(minimal(name="Show\uffff"), CHANNEL_ID).title == ("Show", "pt")
