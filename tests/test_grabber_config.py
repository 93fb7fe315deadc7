"""
Tests for the grabber configuration file and channel selection.
"""
import pytest

from vodafone_epg.errors import ConfigurationError
from vodafone_epg.services.fetch_types import ChannelEntry
from vodafone_epg.services.grabber_config_service import (
    read_grabber_config,
    select_channels,
    write_grabber_config,
)


CATALOG = {
    key: ChannelEntry(key=key, name=f"Channel {key}")
    for key in ("A", "B", "C", "D")
}


def scripted(*answers):
    replies = iter(answers)
    return lambda prompt: next(replies)


def test_write_then_read(tmp_path):
    path = tmp_path / "nested" / "grabber.conf"
    write_grabber_config(path, ["RTP1", "SIC"])
    assert path.read_text(encoding="utf-8") == "channel=RTP1\nchannel=SIC\n"
    assert read_grabber_config(path) == ["RTP1", "SIC"]


def test_read_ignores_comments_and_duplicates(tmp_path):
    path = tmp_path / "grabber.conf"
    path.write_text("# selected\n\nchannel=RTP1\nchannel = SIC\nchannel=RTP1\n", encoding="utf-8")
    assert read_grabber_config(path) == ["RTP1", "SIC"]


def test_read_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="--configure"):
        read_grabber_config(tmp_path / "absent.conf")


def test_read_rejects_unknown_setting(tmp_path):
    path = tmp_path / "grabber.conf"
    path.write_text("channel=RTP1\nstage=foo\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="line 2"):
        read_grabber_config(path)


def test_read_rejects_empty_selection(tmp_path):
    path = tmp_path / "grabber.conf"
    path.write_text("# nothing\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        read_grabber_config(path)


def test_select_default_yes_then_all():
    assert select_channels(CATALOG, scripted("", "no", "all")) == ["A", "C", "D"]


def test_select_none_stops_asking():
    assert select_channels(CATALOG, scripted("y", "none")) == ["A"]


def test_select_reasks_on_ambiguous_answer():
    assert select_channels(CATALOG, scripted("n", "maybe", "no", "a")) == ["B", "C", "D"]
