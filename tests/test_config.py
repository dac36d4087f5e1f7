"""Test configuration, credentials and the error log."""

import logging
import stat

import pytest

from issue_explorer.config import (
    DEFAULT_CONFIG,
    get_config,
    get_credentials_path,
    get_github_config,
    load_credentials,
    save_credentials,
)
from issue_explorer.errors import ConfigError
from issue_explorer.log import append_error_log, logger, setup_logging


class TestGetConfig:
    """Test suite for get_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = get_config()
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_reads_config_toml_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "config.toml").write_text('[github]\nper_page = 50\n')
        monkeypatch.chdir(tmp_path)

        config = get_config()
        assert config["github"]["per_page"] == 50
        assert config["github"]["api_url"] == "https://api.github.com"
        assert config["log"] == DEFAULT_CONFIG["log"]

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_config(str(tmp_path / "missing.toml"))

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[github\nper_page = ")
        with pytest.raises(ConfigError):
            get_config(str(path))


class TestGithubConfig:
    def test_strips_trailing_slash(self):
        config = {"github": {"api_url": "https://github.example.com/api/v3/"}}
        assert get_github_config(config)["api_url"] == "https://github.example.com/api/v3"

    def test_rejects_bad_url(self):
        with pytest.raises(ConfigError):
            get_github_config({"github": {"api_url": "github.com"}})

    def test_rejects_bad_page_size(self):
        with pytest.raises(ConfigError):
            get_github_config({"github": {"per_page": 500}})

    def test_timeout_unset_by_default(self):
        assert get_github_config({})["timeout"] is None


class TestCredentials:
    def test_missing_file(self, test_config):
        assert load_credentials(test_config) is None

    def test_round_trip(self, test_config):
        path = save_credentials("UserName1", "s3cret", test_config)

        assert path == get_credentials_path(test_config)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_credentials(test_config) == {"username": "UserName1", "token": "s3cret"}

    def test_incomplete_file(self, test_config):
        get_credentials_path(test_config).write_text('username = "UserName1"\n')
        assert load_credentials(test_config) is None

    def test_home_is_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_credentials_path({}) == tmp_path / ".issue-explorer"


class TestErrorLog:
    def test_appends_errors_with_traceback(self, test_config):
        log_file = setup_logging(test_config)
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            append_error_log(e)
        append_error_log(ValueError("second"))
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "RuntimeError: boom" in content
        assert "Traceback" in content
        assert "ValueError: second" in content

    def test_setup_is_idempotent(self, test_config):
        setup_logging(test_config)
        setup_logging(test_config)
        assert len([h for h in logger.handlers if isinstance(h, logging.FileHandler)]) == 1

    def test_nothing_written_without_errors(self, test_config):
        log_file = setup_logging(test_config)
        logger.debug("quiet")
        assert not log_file.exists()

    def test_rejects_unknown_level(self, test_config):
        test_config["log"]["level"] = "verbose"
        with pytest.raises(ConfigError):
            setup_logging(test_config)
        assert not [h for h in logger.handlers if isinstance(h, logging.FileHandler)]

    def test_level_is_case_insensitive(self, test_config):
        test_config["log"]["level"] = "debug"
        setup_logging(test_config)
        assert logger.level == logging.DEBUG
