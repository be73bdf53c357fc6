import pytest

from config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.base_url == "https://hacker-news.firebaseio.com/v0"
        assert settings.best_ids_ttl_seconds == 900
        assert settings.story_ttl_seconds == 3600
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize("level", ["debug", "Debug", "DEBUG"])
    def test_log_level_is_upper_cased(self, level: str, monkeypatch) -> None:
        monkeypatch.setenv("HN_LOG_LEVEL", level)

        assert Settings().log_level == "DEBUG"

    def test_reads_prefixed_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("HN_BASE_URL", "http://localhost:9000/v0")
        monkeypatch.setenv("HN_STORY_TTL_SECONDS", "60")

        settings = Settings()

        assert settings.base_url == "http://localhost:9000/v0"
        assert settings.story_ttl_seconds == 60
