import pytest
from pydantic import ValidationError

from sanitizer.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        assert Settings().app_env == "dev"

    def test_default_log_level(self) -> None:
        assert Settings().log_level == "INFO"

    def test_fails_open_by_default(self) -> None:
        assert Settings().sanitizer_fail_closed is False

    def test_single_worker_by_default(self) -> None:
        assert Settings().sanitizer_max_workers == 1

    def test_default_locale_and_matching(self) -> None:
        s = Settings()
        assert s.national_id_locale == "sa"
        assert s.custom_term_matching == "case_insensitive"


class TestSettingsFromEnv:
    def test_loads_fail_closed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZER_FAIL_CLOSED", "true")
        assert Settings().sanitizer_fail_closed is True

    def test_loads_max_workers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZER_MAX_WORKERS", "4")
        assert Settings().sanitizer_max_workers == 4

    def test_loads_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NATIONAL_ID_LOCALE", "ae")
        assert Settings().national_id_locale == "ae"

    def test_loads_custom_term_matching(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CUSTOM_TERM_MATCHING", "transliterated")
        assert Settings().custom_term_matching == "transliterated"


class TestSettingsValidation:
    def test_invalid_max_workers_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZER_MAX_WORKERS", "many")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_bool_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANITIZER_FAIL_CLOSED", "maybe")
        with pytest.raises(ValidationError):
            Settings()
