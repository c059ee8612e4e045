import logging
import os
import shutil
import tempfile

import pytest

from suplapi.application.client import DEFAULT_BASE_URL
from suplapi.crosscutting.config import ConfigError, Settings, load_settings


class TestLoadSettings:
    """Tests for environment and .env based settings."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.env_file = os.path.join(self.temp_dir, '.env')

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write_env(self, content: str) -> None:
        with open(self.env_file, 'w') as f:
            f.write(content)

    def test_defaults(self):
        settings = load_settings(environ={})

        assert settings == Settings()
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0
        assert settings.log_level == 'WARNING'
        assert settings.log_level_number == logging.WARNING

    def test_environment_values(self):
        settings = load_settings(environ={
            'SUPLAPI_BASE_URL': '.staging.example',
            'SUPLAPI_TIMEOUT': '2.5',
            'SUPLAPI_LOG_LEVEL': 'debug',
        })

        assert settings.base_url == '.staging.example'
        assert settings.timeout == 2.5
        assert settings.log_level == 'DEBUG'

    def test_env_file_values(self):
        self._write_env("# comment\nSUPLAPI_TIMEOUT=12\nSUPLAPI_LOG_LEVEL=INFO\n")

        settings = load_settings(env_file=self.env_file, environ={})
        assert settings.timeout == 12.0
        assert settings.log_level == 'INFO'

    def test_environment_wins_over_env_file(self):
        self._write_env("SUPLAPI_TIMEOUT=12\n")

        settings = load_settings(env_file=self.env_file, environ={'SUPLAPI_TIMEOUT': '3'})
        assert settings.timeout == 3.0

    def test_blank_environment_value_falls_back(self):
        self._write_env("SUPLAPI_BASE_URL=.from-file\n")

        settings = load_settings(env_file=self.env_file, environ={'SUPLAPI_BASE_URL': '  '})
        assert settings.base_url == '.from-file'

    def test_missing_env_file(self):
        with pytest.raises(ConfigError, match="Env file not found"):
            load_settings(env_file=os.path.join(self.temp_dir, 'missing.env'), environ={})

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_invalid_timeout(self, value):
        with pytest.raises(ConfigError, match="SUPLAPI_TIMEOUT"):
            load_settings(environ={'SUPLAPI_TIMEOUT': value})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError, match="SUPLAPI_LOG_LEVEL"):
            load_settings(environ={'SUPLAPI_LOG_LEVEL': 'LOUD'})

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv('SUPLAPI_BASE_URL', '.from-process')
        assert load_settings().base_url == '.from-process'
