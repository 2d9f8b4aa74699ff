"""Tests for CLI commands."""

import os
from unittest.mock import patch

import pytest

from podcast_catalog.cli import main
from podcast_catalog.config import get_settings
from podcast_catalog.service import CatalogService
from podcast_catalog.storage import CatalogStore


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
def seeded_url(database_url) -> str:
    store = CatalogStore(database_url)
    store.create_all()
    service = CatalogService(store)
    podcast = service.create_podcast(title="Test Podcast", category="tech", rating=5)
    service.create_episode(podcast.id, title="Pilot", category="intro")
    service.create_episode(podcast.id, title="Second", category="tech")
    store.close()
    return database_url


class TestMain:
    def test_no_command_shows_help(self, capsys):
        with patch("sys.argv", ["podcast-catalog"]):
            result = main()
        assert result == 1

    def test_unknown_command_exits(self):
        with patch("sys.argv", ["podcast-catalog", "unknown-cmd"]):
            with pytest.raises(SystemExit):
                main()


@patch("podcast_catalog.cli.setup_logging")
class TestInitDb:
    def test_creates_tables(self, _mock_logging, database_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", database_url, "init-db"]):
            result = main()

        assert result == 0
        assert "Catalog tables ready" in capsys.readouterr().out
        store = CatalogStore(database_url)
        assert store.count_podcasts() == 0
        store.close()

    def test_reset_drops_data(self, _mock_logging, seeded_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", seeded_url, "init-db", "--reset"]):
            result = main()

        assert result == 0
        store = CatalogStore(seeded_url)
        assert store.count_podcasts() == 0
        store.close()


@patch("podcast_catalog.cli.setup_logging")
class TestListing:
    def test_podcasts(self, _mock_logging, seeded_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", seeded_url, "podcasts"]):
            result = main()

        assert result == 0
        output = capsys.readouterr().out
        assert "PODCASTS (1)" in output
        assert "Test Podcast" in output
        assert "Episodes:  2" in output

    def test_podcasts_empty(self, _mock_logging, database_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", database_url, "podcasts"]):
            result = main()

        assert result == 0
        assert "No podcasts found." in capsys.readouterr().out

    def test_episodes(self, _mock_logging, seeded_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", seeded_url, "episodes", "1"]):
            result = main()

        assert result == 0
        output = capsys.readouterr().out
        assert "Episodes found: 2" in output
        assert "1. [1] Pilot" in output
        assert "2. [2] Second" in output

    def test_episodes_missing_podcast(self, _mock_logging, database_url, capsys):
        with patch("sys.argv", ["podcast-catalog", "--database-url", database_url, "episodes", "7"]):
            result = main()

        assert result == 1
        assert "Podcast with id 7 not found" in capsys.readouterr().out


@pytest.fixture
def clean_settings(monkeypatch):
    """Restore DATABASE_URL and the settings cache after the test."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.usefixtures("clean_settings")
@patch("podcast_catalog.cli.setup_logging")
@patch("uvicorn.run")
class TestServe:
    def test_runs_app_with_settings(self, mock_run, _mock_logging):
        with patch("sys.argv", ["podcast-catalog", "serve", "--host", "0.0.0.0", "-p", "9000"]):
            result = main()

        assert result == 0
        mock_run.assert_called_once()
        served_app = mock_run.call_args.args[0]
        assert served_app.state.settings.database.url == "sqlite:///./podcasts.db"
        assert mock_run.call_args.kwargs == {"host": "0.0.0.0", "port": 9000, "reload": False}

    def test_database_url_reaches_app(self, mock_run, _mock_logging, database_url):
        with patch("sys.argv", ["podcast-catalog", "--database-url", database_url, "serve"]):
            result = main()

        assert result == 0
        served_app = mock_run.call_args.args[0]
        assert served_app.state.settings.database.url == database_url

    def test_reload_passes_import_string_and_exports_url(
        self, mock_run, _mock_logging, database_url
    ):
        argv = ["podcast-catalog", "--database-url", database_url, "serve", "--reload"]
        with patch("sys.argv", argv):
            main()

        assert mock_run.call_args.args[0] == "podcast_catalog.api:app"
        assert mock_run.call_args.kwargs["reload"] is True
        assert os.environ["DATABASE_URL"] == database_url
        assert get_settings().database.url == database_url


@patch("podcast_catalog.cli.setup_logging")
class TestInitDbFailure:
    @patch("podcast_catalog.cli.CatalogStore")
    def test_store_closed_when_reset_fails(self, mock_store_cls, _mock_logging):
        store = mock_store_cls.return_value
        store.drop_all.side_effect = RuntimeError("disk full")

        with patch("sys.argv", ["podcast-catalog", "--database-url", "sqlite://", "init-db", "--reset"]):
            with pytest.raises(RuntimeError, match="disk full"):
                main()

        store.close.assert_called_once()

    @patch("podcast_catalog.cli.CatalogStore")
    def test_store_closed_when_create_fails(self, mock_store_cls, _mock_logging):
        store = mock_store_cls.return_value
        store.create_all.side_effect = RuntimeError("locked")

        with patch("sys.argv", ["podcast-catalog", "--database-url", "sqlite://", "init-db"]):
            with pytest.raises(RuntimeError, match="locked"):
                main()

        store.close.assert_called_once()
