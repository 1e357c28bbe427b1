from __future__ import annotations

from pathlib import Path

import pytest

from mapty.cli.main import build_parser, config_from_args
from mapty.core.config import AppConfig, parse_location


def test_defaults() -> None:
    config = config_from_args(build_parser().parse_args([]))

    assert config == AppConfig()
    assert config.resolved_data_path == Path.home() / ".mapty" / "storage.json"


def test_file_storage_with_fixed_location(tmp_path: Path) -> None:
    data_file = tmp_path / "workouts.json"
    args = build_parser().parse_args(
        [
            "--storage",
            "file",
            "--data-file",
            str(data_file),
            "--location",
            "51.5,-0.1",
            "--zoom",
            "13",
            "--web-port",
            "9000",
            "-v",
        ]
    )

    config = config_from_args(args)

    assert config.storage == "file"
    assert config.resolved_data_path == data_file
    assert config.location == (51.5, -0.1)
    assert config.zoom_level == 13
    assert config.port == 9000
    assert config.verbose


def test_bad_location_is_a_usage_error() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--location", "north"])


@pytest.mark.parametrize("raw", ["1", "a,b", "91,0", "0,181", "nan,0", "1,2,3"])
def test_parse_location_rejects(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_location(raw)


def test_parse_location_accepts_spaces() -> None:
    assert parse_location(" 51.5 , -0.1 ") == (51.5, -0.1)
