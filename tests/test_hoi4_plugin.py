"""Hearts of Iron IV save extractor tests."""

from __future__ import annotations

import pytest
from conftest import set_mtime, write_hoi4

from paradox_presence.plugins.hoi4.countries import get_country_name
from paradox_presence.plugins.hoi4.plugin import (
    DEFAULT_DETAILS,
    IRONMAN_STATE,
    Hoi4Extractor,
    SaveFormat,
    detect_format,
)

PLAINTEXT_BODY = (
    'date="1939.9.1.12"\n'
    'player="GER"\n'
    'ideology="fascism"\n'
)


@pytest.fixture
def save_dir(tmp_path):
    d = tmp_path / "save games"
    d.mkdir()
    return d


@pytest.fixture
def extractor(save_dir) -> Hoi4Extractor:
    return Hoi4Extractor(save_dir, refresh_interval_ms=0)


def test_detect_format(tmp_path) -> None:
    assert detect_format(write_hoi4(tmp_path / "t.hoi4")) is SaveFormat.PLAINTEXT
    assert detect_format(write_hoi4(tmp_path / "b.hoi4", header=b"HOI4bin")) is SaveFormat.BINARY
    assert detect_format(write_hoi4(tmp_path / "u.hoi4", header=b"EU4txt!")) is SaveFormat.UNKNOWN

    short = tmp_path / "short.hoi4"
    short.write_bytes(b"HOI4")
    assert detect_format(short) is SaveFormat.UNKNOWN


def test_plaintext_save_resolves_country_and_year(save_dir, extractor) -> None:
    write_hoi4(save_dir / "germany.hoi4", PLAINTEXT_BODY)

    assert extractor.refresh() is True
    assert extractor.country_tag == "GER"
    assert extractor.country_name == "German Reich"
    assert extractor.year == "1939"
    assert extractor.is_ironman is False
    assert extractor.details_text() == "Playing as German Reich"
    assert extractor.state_text() == "Year: 1939"


def test_first_match_wins(save_dir, extractor) -> None:
    body = 'player="SOV"\ndate="1936.1.1"\nplayer="GER"\ndate="1945.5.8"\n'
    write_hoi4(save_dir / "multi.hoi4", body)

    extractor.refresh()
    assert extractor.country_name == "Soviet Union"
    assert extractor.year == "1936"


def test_unknown_tag_is_shown_verbatim(save_dir, extractor) -> None:
    write_hoi4(save_dir / "minor.hoi4", 'player="XYZ"\n')

    extractor.refresh()
    assert extractor.details_text() == "Playing as XYZ"
    assert extractor.state_text() is None


def test_missing_fields_keep_cached_values(save_dir, extractor) -> None:
    path = write_hoi4(save_dir / "campaign.hoi4", PLAINTEXT_BODY, mtime=1000)
    extractor.refresh()

    write_hoi4(path, 'ideology="democratic"\n', mtime=2000)
    assert extractor.refresh() is True
    assert extractor.decode_count == 2
    assert extractor.country_name == "German Reich"
    assert extractor.year == "1939"


def test_fields_beyond_line_window_are_ignored(save_dir, extractor) -> None:
    filler = "x=1\n" * 1000
    write_hoi4(save_dir / "long.hoi4", filler + PLAINTEXT_BODY)

    extractor.refresh()
    assert extractor.country_name is None
    assert extractor.year is None
    assert extractor.details_text() == DEFAULT_DETAILS


def test_binary_save_sets_ironman_and_clears_fields(save_dir, extractor) -> None:
    path = write_hoi4(save_dir / "campaign.hoi4", PLAINTEXT_BODY, mtime=1000)
    extractor.refresh()
    assert extractor.country_name == "German Reich"

    path.write_bytes(b"HOI4bin")
    set_mtime(path, 2000)
    assert extractor.refresh() is True

    assert extractor.is_ironman is True
    assert extractor.country_tag is None
    assert extractor.country_name is None
    assert extractor.year is None
    assert extractor.details_text() == DEFAULT_DETAILS
    assert extractor.state_text() == IRONMAN_STATE


def test_unknown_header_clears_fields_and_uses_default(save_dir, extractor) -> None:
    path = write_hoi4(save_dir / "campaign.hoi4", PLAINTEXT_BODY, mtime=1000)
    extractor.refresh()

    write_hoi4(path, PLAINTEXT_BODY, header=b"garbage", mtime=2000)
    extractor.refresh()

    assert extractor.is_ironman is False
    assert extractor.country_name is None
    assert extractor.year is None
    assert extractor.details_text() == DEFAULT_DETAILS
    assert extractor.state_text() is None


def test_defaults_before_any_save(extractor) -> None:
    assert extractor.refresh() is False
    assert extractor.details_text() == DEFAULT_DETAILS
    assert extractor.state_text() is None


def test_ignores_other_extensions(save_dir, extractor) -> None:
    write_hoi4(save_dir / "notes.txt", PLAINTEXT_BODY)
    assert extractor.refresh() is False


def test_country_table() -> None:
    assert get_country_name("ENG") == "United Kingdom"
    assert get_country_name("SPR") == "Republican Spain"
    assert get_country_name("QQQ") == "QQQ"


@pytest.mark.parametrize("date", ["1939.9.1", "1939.9.1.12"])
def test_date_with_and_without_hour(save_dir, extractor, date) -> None:
    write_hoi4(save_dir / "d.hoi4", f'player="GER"\ndate="{date}"\n')

    extractor.refresh()
    assert extractor.year == "1939"
    assert extractor.details_text() == "Playing as German Reich"


def test_failed_plaintext_read_keeps_ironman_flag(save_dir, extractor, monkeypatch) -> None:
    path = write_hoi4(save_dir / "campaign.hoi4", header=b"HOI4bin", mtime=1000)
    extractor.refresh()
    assert extractor.is_ironman is True

    def locked(save_file):
        raise PermissionError("locked")

    monkeypatch.setattr(extractor, "_extract_from_plaintext", locked)
    write_hoi4(path, PLAINTEXT_BODY, mtime=2000)

    assert extractor.refresh() is True
    assert extractor.is_ironman is True
    assert extractor.state_text() == IRONMAN_STATE
