from pathlib import Path

import pytest


def ics(*events: str, calendars: int = 1) -> str:
    body = "".join(f"BEGIN:VEVENT\n{event.strip()}\nEND:VEVENT\n" for event in events)
    calendar = f"BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:-//test//EN\n{body}END:VCALENDAR\n"
    return calendar * calendars


@pytest.fixture
def write_ics(tmp_path: Path):
    def write(*events: str, calendars: int = 1) -> Path:
        path = tmp_path / "calendar.ics"
        path.write_text(ics(*events, calendars=calendars), encoding="utf-8")
        return path

    return write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path
