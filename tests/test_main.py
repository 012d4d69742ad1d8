"""Tests for the command-line entrypoint."""

from __future__ import annotations

import asyncio
import io
import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

from trip_searcher.main import DEFAULT_CONFIG_PATH, main, parse_args, resolve_config_path, run_viewer
from trip_searcher.models import FetchOk
from trip_searcher.output import ConsoleRenderer
from trip_searcher.store import ContentStore
from trip_searcher.utils.config_loader import DEFAULT_ENDPOINT

PAYLOAD = json.dumps(
    {
        "data": [
            {"type": "slide", "title": "Welcome", "content": "Plan your trip"},
            {"type": "banner", "title": "Hidden", "content": "not rendered"},
            {"type": "story", "title": "Isfahan", "content": "Two days"},
        ]
    }
)


def _store() -> ContentStore:
    return ContentStore("https://example.com/home.json", fetcher=lambda endpoint, **kw: FetchOk(PAYLOAD))


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.config is None
        assert args.interactive is False
        assert args.log_level == "INFO"

    def test_overrides(self):
        args = parse_args(["--endpoint", "http://x.example/a.json", "--manifest", "m.txt", "--interactive"])
        assert args.endpoint == "http://x.example/a.json"
        assert args.manifest == "m.txt"
        assert args.interactive is True


class TestResolveConfigPath:
    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_config_path("other.yaml") == Path("other.yaml")

    def test_uses_bundled_file_when_present(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / DEFAULT_CONFIG_PATH).write_text("read_timeout_ms: 900\n", encoding="utf-8")
        assert resolve_config_path(None) == Path(DEFAULT_CONFIG_PATH)

    def test_none_when_bundled_file_absent(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_config_path(None) is None


class TestRunViewer:
    def test_single_shot_renders_content(self):
        stream = io.StringIO()
        store = _store()
        asyncio.run(run_viewer(store, ConsoleRenderer(stream)))
        out = stream.getvalue()
        assert "[Slide] Welcome" in out
        assert "[Story] Isfahan" in out
        assert "Hidden" not in out
        assert store.current_snapshot().is_loading is False

    @patch("builtins.input", side_effect=["", "q"])
    def test_interactive_refreshes_until_quit(self, mock_input):
        calls = []

        def fetcher(endpoint, **kwargs):
            calls.append(endpoint)
            return FetchOk(PAYLOAD)

        store = ContentStore("https://example.com/home.json", fetcher=fetcher)
        asyncio.run(run_viewer(store, ConsoleRenderer(io.StringIO()), interactive=True))
        assert len(calls) == 2
        assert mock_input.call_count == 2


@patch("trip_searcher.main.configure_logging")
@patch("trip_searcher.main.load_dotenv")
class TestMain:
    @patch("trip_searcher.main.run_viewer", new_callable=AsyncMock)
    def test_runs_viewer(self, mock_run, mock_dotenv, mock_logging, tmp_path, monkeypatch):
        for var in ("TRIP_SEARCHER_ENDPOINT", "TRIP_SEARCHER_MANIFEST"):
            monkeypatch.delenv(var, raising=False)
        manifest = tmp_path / "assets.txt"
        manifest.write_text("hero.png\n", encoding="utf-8")
        rc = main(["--endpoint", "http://localhost:9000/home.json", "--manifest", str(manifest)])
        assert rc == 0
        store = mock_run.call_args.args[0]
        assert store.endpoint == "http://localhost:9000/home.json"
        assert store.assets == ["hero.png"]
        assert mock_run.call_args.kwargs == {"interactive": False}

    @patch("trip_searcher.main.run_viewer", new_callable=AsyncMock)
    def test_missing_manifest_is_not_fatal(self, mock_run, mock_dotenv, mock_logging, tmp_path):
        rc = main(["--manifest", str(tmp_path / "missing.txt")])
        assert rc == 0
        assert mock_run.call_args.args[0].assets == []

    @patch("trip_searcher.main.run_viewer", new_callable=AsyncMock)
    def test_reads_bundled_config_by_default(self, mock_run, mock_dotenv, mock_logging, tmp_path, monkeypatch):
        monkeypatch.delenv("TRIP_SEARCHER_ENDPOINT", raising=False)
        monkeypatch.delenv("TRIP_SEARCHER_READ_TIMEOUT_MS", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / DEFAULT_CONFIG_PATH).write_text(
            "endpoint: http://localhost:9000/home.json\nread_timeout_ms: 900\n", encoding="utf-8"
        )
        assert main([]) == 0
        store = mock_run.call_args.args[0]
        assert store.endpoint == "http://localhost:9000/home.json"
        assert store.read_timeout_ms == 900

    @patch("trip_searcher.main.run_viewer", new_callable=AsyncMock)
    def test_runs_without_bundled_config(self, mock_run, mock_dotenv, mock_logging, tmp_path, monkeypatch):
        monkeypatch.delenv("TRIP_SEARCHER_ENDPOINT", raising=False)
        monkeypatch.chdir(tmp_path)
        assert main([]) == 0
        assert mock_run.call_args.args[0].endpoint == DEFAULT_ENDPOINT

    def test_bad_endpoint_exits_1(self, mock_dotenv, mock_logging):
        assert main(["--endpoint", "not-a-url"]) == 1

    def test_missing_config_exits_1(self, mock_dotenv, mock_logging, tmp_path):
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1

    def test_closed_stdin_exits_cleanly(self, mock_dotenv, mock_logging, tmp_path):
        with patch("trip_searcher.main.run_viewer", new_callable=AsyncMock, side_effect=EOFError):
            assert main(["--manifest", str(tmp_path / "a.txt")]) == 0
