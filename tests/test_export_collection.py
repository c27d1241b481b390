"""Tests for the collection export job."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shelfpicker.jobs.export_collection import export_collection, main
from shelfpicker.models.result import Ok
from tests.helpers import DETAILS, ENTRIES, PLAYS, PROCESSING, StubClient


def _client_factory(stub: StubClient) -> MagicMock:
    """BggClient replacement whose context manager yields the stub."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=stub)
    factory.return_value.__aexit__ = AsyncMock(return_value=None)
    return factory


class TestExportCollection:
    async def test_writes_games(self, tmp_path: Path) -> None:
        """Merged games are written as a JSON array."""
        stub = StubClient(Ok(ENTRIES), Ok(DETAILS), Ok(PLAYS))
        output = tmp_path / "out" / "alice.json"

        with patch("shelfpicker.jobs.export_collection.BggClient", _client_factory(stub)):
            written = await export_collection("alice", output)

        assert written == 3
        games = json.loads(output.read_text())
        assert [g["name"] for g in games] == ["Azul", "Brass", "Azul"]
        assert games[0]["categories"] == ["Puzzle"]
        assert games[1]["last_played"] == "2024-06-01"

    async def test_failure_writes_nothing(self, tmp_path: Path) -> None:
        stub = StubClient(PROCESSING)
        output = tmp_path / "alice.json"

        with patch("shelfpicker.jobs.export_collection.BggClient", _client_factory(stub)):
            written = await export_collection("alice", output)

        assert written == -1
        assert not output.exists()


class TestMain:
    def test_exits_nonzero_on_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["shelfpicker-export", "alice"])

        with (
            patch(
                "shelfpicker.jobs.export_collection.export_collection",
                new_callable=AsyncMock,
                return_value=-1,
            ),
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1

    def test_default_output_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["shelfpicker-export", "alice"])

        with patch(
            "shelfpicker.jobs.export_collection.export_collection",
            new_callable=AsyncMock,
            return_value=3,
        ) as mock_export:
            main()

        mock_export.assert_awaited_once_with("alice", Path("alice.json"))

    def test_explicit_output_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        target = tmp_path / "games.json"
        monkeypatch.setattr("sys.argv", ["shelfpicker-export", "bob", "--output", str(target)])

        with patch(
            "shelfpicker.jobs.export_collection.export_collection",
            new_callable=AsyncMock,
            return_value=0,
        ) as mock_export:
            main()

        mock_export.assert_awaited_once_with("bob", target)
