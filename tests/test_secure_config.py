"""
Tests for secure configuration

Tests environment token lookup, Azure DevOps fallback validation and the
config singleton.
"""

import pytest

from azc.secure_config import (
    ACCESS_TOKEN_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    ORG_URL_ENV_VAR,
    PAT_ENV_VAR,
    PROJECT_ENV_VAR,
    AzureDevOpsConfig,
    ConfigurationError,
    get_config,
)


class TestEnvTokens:
    """Test token lookup"""

    def test_unset_is_none(self, secure_config):
        assert secure_config.get_env_token(PAT_ENV_VAR) is None

    def test_value_is_trimmed(self, secure_config, monkeypatch):
        monkeypatch.setenv(ACCESS_TOKEN_ENV_VAR, "\t token \n")

        assert secure_config.get_env_token(ACCESS_TOKEN_ENV_VAR) == "token"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_is_none(self, secure_config, monkeypatch, blank):
        monkeypatch.setenv(PAT_ENV_VAR, blank)

        assert secure_config.get_env_token(PAT_ENV_VAR) is None


class TestAzureDevOpsConfig:
    """Test fallback organization/project validation"""

    def test_empty_environment(self, secure_config):
        config = secure_config.get_ado_config()

        assert config.organization_url is None
        assert config.project is None

    def test_values_from_environment(self, secure_config, monkeypatch):
        monkeypatch.setenv(ORG_URL_ENV_VAR, "https://dev.azure.com/contoso/")
        monkeypatch.setenv(PROJECT_ENV_VAR, "Mobile App")

        config = secure_config.get_ado_config()

        assert config.organization_url == "https://dev.azure.com/contoso"
        assert config.project == "Mobile App"

    def test_legacy_visualstudio_url(self):
        assert AzureDevOpsConfig(organization_url="https://contoso.visualstudio.com").organization_url

    def test_http_rejected(self):
        with pytest.raises(ConfigurationError, match="must use HTTPS"):
            AzureDevOpsConfig(organization_url="http://dev.azure.com/contoso")

    def test_foreign_host_rejected(self):
        with pytest.raises(ConfigurationError, match="valid Azure DevOps URL"):
            AzureDevOpsConfig(organization_url="https://example.com/contoso")

    def test_invalid_project_rejected(self):
        with pytest.raises(ConfigurationError, match="invalid characters"):
            AzureDevOpsConfig(project="web; rm -rf /")


class TestLogLevel:
    """Test log level lookup"""

    def test_default_warning(self, secure_config, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

        assert secure_config.get_log_level() == "WARNING"

    def test_normalized(self, secure_config, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, " debug ")

        assert secure_config.get_log_level() == "DEBUG"


def test_get_config_is_singleton():
    assert get_config() is get_config()
