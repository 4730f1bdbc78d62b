import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from icsgen.config.constants import DEFAULT_TIMEZONES
from icsgen.config.settings import (
    Chances,
    GeneratorOptions,
    RuntimeConfig,
    load_options,
    options_from_dict,
)
from icsgen.exceptions.errors import OptionsError


def write_options(tmp_path: Path, data) -> Path:
    path = tmp_path / "options.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults() -> None:
    options = load_options()

    assert options.items == 10
    assert options.day_span == 14
    assert (options.min_duration, options.max_duration) == (15, 120)
    assert options.method == "PUBLISH"
    assert options.round_to == 5
    assert options.chances == Chances(task=0.1, all_day=0.2, multi_day=0.2, recurring=0.1, meeting=0.3)
    assert options.timezones == DEFAULT_TIMEZONES
    assert options.outfile is None


def test_load_options_merges_over_defaults(tmp_path: Path) -> None:
    path = write_options(tmp_path, {
        "items": 3,
        "start": "2024-05-01",
        "daySpan": 2.5,
        "chances": {"task": 0.5, "allDay": 0},
        "timezones": ["", "Asia/Tokyo"],
        "names": {"first": ["Ann"]},
        "outfile": "out.ics",
        "seed": 99,
    })

    options = load_options(path)

    assert options.items == 3
    assert options.start == datetime(2024, 5, 1)
    assert options.day_span == 2.5
    assert options.chances.task == 0.5
    assert options.chances.all_day == 0
    assert options.chances.meeting == 0.3
    assert options.timezones == ["", "Asia/Tokyo"]
    assert options.names.first == ["Ann"]
    assert options.names.last  # default last names kept
    assert options.outfile == "out.ics"
    assert options.seed == 99
    assert options.min_duration == 15


def test_unknown_keys_are_ignored_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = write_options(tmp_path, {"items": 1, "colour": "blue"})

    with caplog.at_level(logging.WARNING, logger="icsgen"):
        options = load_options(path)

    assert options.items == 1
    assert "colour" in caplog.text


def test_overrides_merge_over_base() -> None:
    base = options_from_dict({"items": 4, "chances": {"task": 1}})

    merged = options_from_dict({"seed": 5, "chances": {"meeting": 0}}, base=base)

    assert merged.items == 4
    assert merged.seed == 5
    assert merged.chances.task == 1
    assert merged.chances.meeting == 0


def test_relative_start_uses_reference_date() -> None:
    options = options_from_dict({"start": "tomorrow"}, reference_date=datetime(2024, 1, 31, 10))

    assert options.start == datetime(2024, 2, 1)


def test_default_start_is_naive_utc() -> None:
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    start = GeneratorOptions().start
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    assert start.tzinfo is None
    assert before <= start <= after


@pytest.mark.parametrize("data, key", [
    ({"items": -1}, "items"),
    ({"items": "ten"}, "items"),
    ({"items": True}, "items"),
    ({"items": None}, "items"),
    ({"minDuration": 60, "maxDuration": 30}, "maxDuration"),
    ({"roundTo": 0}, "roundTo"),
    ({"chances": {"task": 1.5}}, "chances.task"),
    ({"chances": {"meeting": "often"}}, "chances.meeting"),
    ({"chances": [0.1]}, "chances"),
    ({"timezones": "Europe/London"}, "timezones"),
    ({"names": {"first": []}}, "names"),
    ({"start": "not a date at all"}, "start"),
])
def test_invalid_options(data, key: str) -> None:
    with pytest.raises(OptionsError) as excinfo:
        options_from_dict(data)

    assert excinfo.value.key == key


def test_options_must_be_an_object(tmp_path: Path) -> None:
    with pytest.raises(OptionsError):
        load_options(write_options(tmp_path, [1, 2, 3]))


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "options.json"
    path.write_text("{items: 3,}", encoding="utf-8")

    with pytest.raises(OptionsError, match="invalid JSON"):
        load_options(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OptionsError, match="cannot read"):
        load_options(tmp_path / "missing.json")


def test_validate_returns_self() -> None:
    options = GeneratorOptions(items=2)

    assert options.validate() is options


def test_runtime_config_from_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ICSGEN_ZONEINFO_DIR", raising=False)
    monkeypatch.delenv("ICSGEN_LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("ICSGEN_ZONEINFO_DIR=/opt/zoneinfo\nICSGEN_LOG_LEVEL=debug\n", encoding="utf-8")

    config = RuntimeConfig.from_env(env_file)

    assert config.zoneinfo_dir == "/opt/zoneinfo"
    assert config.log_level == "DEBUG"


def test_runtime_config_environment_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ICSGEN_ZONEINFO_DIR=/opt/zoneinfo\n", encoding="utf-8")
    monkeypatch.setenv("ICSGEN_ZONEINFO_DIR", "/srv/zoneinfo")
    monkeypatch.delenv("ICSGEN_LOG_LEVEL", raising=False)

    config = RuntimeConfig.from_env(env_file)

    assert config.zoneinfo_dir == "/srv/zoneinfo"
    assert config.log_level == "WARNING"


def test_runtime_config_without_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ICSGEN_ZONEINFO_DIR", raising=False)

    config = RuntimeConfig.from_env(tmp_path / "missing.env")

    assert config.zoneinfo_dir is None
