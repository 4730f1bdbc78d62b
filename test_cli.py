import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from icsgen.cli import app

runner = CliRunner()

TOKYO_ICS = (
    "BEGIN:VCALENDAR\r\n"
    "BEGIN:VTIMEZONE\r\n"
    "TZID:/citadel.org/20190101_1/Asia/Tokyo\r\n"
    "BEGIN:STANDARD\r\n"
    "TZNAME:JST\r\n"
    "DTSTART:19700101T000000\r\n"
    "TZOFFSETFROM:+0900\r\n"
    "TZOFFSETTO:+0900\r\n"
    "END:STANDARD\r\n"
    "END:VTIMEZONE\r\n"
    "END:VCALENDAR\r\n"
)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ICSGEN_ZONEINFO_DIR", raising=False)
    zone = tmp_path / "zoneinfo" / "Asia" / "Tokyo.ics"
    zone.parent.mkdir(parents=True)
    zone.write_text(TOKYO_ICS, encoding="utf-8")
    return tmp_path


def write_options(directory: Path, data) -> Path:
    path = directory / "options.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_generate_to_stdout(workdir: Path) -> None:
    options = write_options(workdir, {"items": 5, "timezones": ["", "Asia/Tokyo"], "start": "2024-06-01"})

    result = runner.invoke(app, [str(options), "--seed", "3", "--zoneinfo-dir", str(workdir / "zoneinfo")])

    assert result.exit_code == 0, result.output
    document = result.stdout
    assert document.startswith("BEGIN:VCALENDAR\r\nVERSION:2.0\r\n")
    assert document.endswith("END:VCALENDAR\r\n")
    assert not document.endswith("\r\n\r\n")
    lines = document.split("\r\n")[:-1]
    assert sum(1 for line in lines if line in ("BEGIN:VEVENT", "BEGIN:VTODO")) == 5


def test_command_line_flags_override_options_file(workdir: Path) -> None:
    options = write_options(workdir, {"items": 5, "timezones": [""]})

    result = runner.invoke(app, [str(options), "--items", "2"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.split("\r\n")
    assert sum(1 for line in lines if line in ("BEGIN:VEVENT", "BEGIN:VTODO")) == 2


def test_generate_to_file(workdir: Path) -> None:
    options = write_options(workdir, {"items": 3, "timezones": [""]})
    out = workdir / "fixtures.ics"

    result = runner.invoke(app, [str(options), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    content = out.read_bytes().decode("utf-8")
    assert content.startswith("BEGIN:VCALENDAR\r\n")
    assert content.endswith("END:VCALENDAR\r\n")
    assert "\n" not in content.replace("\r\n", "")


def test_outfile_from_options_file(workdir: Path) -> None:
    options = write_options(workdir, {"items": 1, "timezones": [""], "outfile": "from-options.ics"})

    result = runner.invoke(app, [str(options)])

    assert result.exit_code == 0, result.output
    assert (workdir / "from-options.ics").exists()


def test_zoneinfo_dir_from_environment(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ICSGEN_ZONEINFO_DIR", str(workdir / "zoneinfo"))
    options = write_options(workdir, {"items": 20, "timezones": ["Asia/Tokyo"]})

    result = runner.invoke(app, [str(options), "--seed", "1"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.split("\r\n")
    assert lines.count("BEGIN:VTIMEZONE") == 1
    assert "TZID:Asia/Tokyo" in lines


def test_invalid_options_exit_with_error(workdir: Path) -> None:
    options = write_options(workdir, {"items": -4})

    result = runner.invoke(app, [str(options)])

    assert result.exit_code == 1
    assert "Invalid option 'items'" in result.output


def test_missing_timezone_file_is_fatal(workdir: Path) -> None:
    options = write_options(workdir, {"items": 5, "timezones": ["Europe/London"]})

    result = runner.invoke(app, [str(options), "--zoneinfo-dir", str(workdir / "zoneinfo")])

    assert result.exit_code == 1
    assert "Europe/London" in result.output
