"""Process scanner tests."""

from __future__ import annotations

import pytest

from paradox_presence.core import registry, scanner
from paradox_presence.core.scanner import ProcessScanner
from paradox_presence.models.game import GameSignature

STELLARIS = registry.get_signature("stellaris")
HOI4 = registry.get_signature("hoi4")

TASKLIST = [
    "Image Name                     PID Session Name        Session#    Mem Usage",
    "========================= ======== ================ =========== ============",
    "System Idle Process              0 Services                   0          8 K",
    "explorer.exe                  4312 Console                    1    152,336 K",
]


def _scanner(lines, signatures=None) -> ProcessScanner:
    return ProcessScanner(signatures, lister=lambda: iter(lines))


@pytest.mark.parametrize("line", [
    "hoi4.exe                      9001 Console                    1  3,000,000 K",
    "HOI4.EXE                      9001 Console                    1  3,000,000 K",
    "C:\\Games\\Hoi4.Exe",
])
def test_registered_key_in_any_case_is_detected(line) -> None:
    assert _scanner(TASKLIST + [line]).scan() is HOI4


def test_no_registered_key_returns_none() -> None:
    assert _scanner(TASKLIST).scan() is None


def test_empty_listing_returns_none() -> None:
    assert _scanner([]).scan() is None


def test_registry_order_wins_over_listing_order() -> None:
    lines = TASKLIST + ["hoi4.exe  1 Console", "stellaris.exe  2 Console"]
    assert _scanner(lines).scan() is STELLARIS


def test_registry_order_breaks_ties_within_one_line() -> None:
    assert _scanner(["stellaris.exe hoi4.exe"]).scan() is STELLARIS


def test_stops_reading_after_top_priority_match() -> None:
    consumed: list[str] = []

    def lister():
        for line in ["stellaris.exe", "never-read.exe"]:
            consumed.append(line)
            yield line

    assert ProcessScanner(lister=lister).scan() is STELLARIS
    assert consumed == ["stellaris.exe"]


def test_listing_that_fails_to_start_returns_none() -> None:
    def lister():
        raise OSError("process listing unavailable")

    assert ProcessScanner(lister=lister).scan() is None


def test_listing_that_fails_mid_read_returns_none() -> None:
    def lister():
        yield "hoi4.exe"
        raise OSError("pipe closed")

    assert ProcessScanner(lister=lister).scan() is None


def test_custom_registry() -> None:
    sig = GameSignature(
        key="eu4", process_name="eu4.exe", display_name="Europa Universalis IV",
        app_id="1", large_image_key="eu4", large_image_text="EU4", extractor="eu4",
    )
    scanner = _scanner(["EU4.exe 12"], signatures=[sig])
    assert scanner.scan() is sig
    assert scanner.list_signatures() == [sig]


def test_default_registry_lists_every_game() -> None:
    assert ProcessScanner(lister=lambda: []).list_signatures() == registry.all_signatures()
    assert [s.key for s in registry.all_signatures()] == ["stellaris", "hoi4"]


class _FakeProc:
    def __init__(self, pid, name) -> None:
        self.pid = pid
        self.info = {"name": name}


def test_list_processes_yields_process_names(monkeypatch) -> None:
    procs = [_FakeProc(1, "explorer.exe"), _FakeProc(2, None), _FakeProc(3, "stellaris.exe")]
    monkeypatch.setattr(scanner.psutil, "process_iter", lambda attrs: iter(procs))

    assert list(scanner.list_processes()) == ["explorer.exe", "stellaris.exe"]


def test_default_lister_matches_names_longer_than_ps_comm(monkeypatch) -> None:
    sig = GameSignature(
        key="ck3", process_name="crusaderkings3_long.exe", display_name="Crusader Kings III",
        app_id="1", large_image_key="ck3", large_image_text="CK3", extractor="ck3",
    )
    procs = [_FakeProc(7, "CrusaderKings3_Long.exe")]
    monkeypatch.setattr(scanner.psutil, "process_iter", lambda attrs: iter(procs))

    assert ProcessScanner([sig]).scan() is sig


def test_process_iteration_error_returns_none(monkeypatch) -> None:
    def process_iter(attrs):
        yield _FakeProc(1, "hoi4.exe")
        raise scanner.psutil.AccessDenied(pid=2)

    monkeypatch.setattr(scanner.psutil, "process_iter", process_iter)

    assert ProcessScanner().scan() is None
