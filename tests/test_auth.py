"""Test the authorization flow."""

from unittest.mock import Mock

import pytest
import requests

from issue_explorer.auth import authorize, prompt_credentials
from issue_explorer.config import get_credentials_path, load_credentials
from issue_explorer.errors import AuthFailed, GitHubError


@pytest.fixture
def client():
    client = Mock()
    client.get_authenticated_user.return_value = {"login": "UserName1"}
    client.token = None
    return client


class TestAuthorize:
    """Test suite for authorize."""

    def test_stores_verified_token(self, client, test_config):
        path = authorize("username1", "s3cret", client, test_config)

        client.get_authenticated_user.assert_called_once_with(token="s3cret")
        assert path == get_credentials_path(test_config)
        assert load_credentials(test_config) == {"username": "UserName1", "token": "s3cret"}
        assert client.token == "s3cret"

    def test_rejected_token_writes_nothing(self, client, test_config):
        client.get_authenticated_user.side_effect = GitHubError(401, "Bad credentials")

        with pytest.raises(AuthFailed, match="Bad credentials"):
            authorize("UserName1", "wrong", client, test_config)
        assert not get_credentials_path(test_config).exists()

    def test_token_of_someone_else(self, client, test_config):
        client.get_authenticated_user.return_value = {"login": "SomeoneElse"}

        with pytest.raises(AuthFailed):
            authorize("UserName1", "s3cret", client, test_config)
        assert not get_credentials_path(test_config).exists()

    def test_network_failure(self, client, test_config):
        client.get_authenticated_user.side_effect = requests.ConnectionError("offline")
        with pytest.raises(AuthFailed, match="could not reach GitHub"):
            authorize("UserName1", "s3cret", client, test_config)


class TestPromptCredentials:
    def test_asks_until_answered(self, capsys):
        answers = iter(["", "  UserName1 "])
        secrets = iter(["", "s3cret"])

        result = prompt_credentials(lambda _: next(answers), lambda _: next(secrets))

        assert result == {"username": "UserName1", "token": "s3cret"}
        output = capsys.readouterr().out
        assert "invalid username" in output
        assert "invalid token" in output
