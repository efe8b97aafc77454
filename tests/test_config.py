import pytest

from config import Settings, load_settings


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings({})
        assert settings == Settings()
        assert settings.port == 8080
        assert settings.host == "0.0.0.0"
        assert settings.debug is False

    def test_environment_overrides(self):
        settings = load_settings({
            "PORT": "8000",
            "HOST": "127.0.0.1",
            "LOG_LEVEL": "debug",
            "DEBUG": "True",
            "BATTLESNAKE_AUTHOR": "someone",
            "BATTLESNAKE_COLOR": "#ffffff",
            "BATTLESNAKE_HEAD": "smile",
            "BATTLESNAKE_TAIL": "bolt",
        })
        assert settings.port == 8000
        assert settings.host == "127.0.0.1"
        assert settings.log_level == "DEBUG"
        assert settings.debug is True
        assert settings.info() == {
            "apiversion": "1",
            "author": "someone",
            "color": "#ffffff",
            "head": "smile",
            "tail": "bolt",
        }

    @pytest.mark.parametrize("value", ["0", "no", "", "off"])
    def test_debug_falsy_values(self, value):
        assert load_settings({"DEBUG": value}).debug is False

    def test_bad_port(self):
        with pytest.raises(ValueError, match="PORT"):
            load_settings({"PORT": "eighty"})

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "9001")
        assert load_settings().port == 9001
