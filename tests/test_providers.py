"""Tests for the built-in secret providers."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from sparta.config import Config
from sparta.errors import SecretFetchError
from sparta.secrets import ProviderRegistry, SecretResolver
from sparta.secrets.aws import create_client
from sparta.secrets.aws_secret_manager import AwsSecretManagerProvider
from sparta.secrets.aws_ssm_parameters import AwsSsmParametersProvider
from sparta.secrets.environment import EnvironmentProvider


def _client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, operation)


class TestAwsSecretManager:
    def test_fetch_secret_string(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretString": '{"user": "app"}'}

        provider = AwsSecretManagerProvider({}, client=client)
        assert provider.fetch("prod/db") == '{"user": "app"}'
        client.get_secret_value.assert_called_once_with(SecretId="prod/db")

    def test_version_stage(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretString": "old"}

        provider = AwsSecretManagerProvider({"version_stage": "AWSPREVIOUS"}, client=client)
        provider.fetch("prod/db")
        client.get_secret_value.assert_called_once_with(
            SecretId="prod/db", VersionStage="AWSPREVIOUS",
        )

    def test_binary_secret(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretBinary": b"raw"}
        assert AwsSecretManagerProvider({}, client=client).fetch("bin") == "raw"

    def test_not_found_propagates_unchanged(self):
        client = MagicMock()
        error = _client_error("ResourceNotFoundException", "GetSecretValue")
        client.get_secret_value.side_effect = error

        provider = AwsSecretManagerProvider({}, client=client)
        with pytest.raises(ClientError) as info:
            provider.fetch("missing")
        assert info.value is error


class TestAwsSsmParameters:
    def test_fetch_decrypts(self):
        client = MagicMock()
        client.get_parameter.return_value = {"Parameter": {"Value": "s3cret"}}

        provider = AwsSsmParametersProvider({}, client=client)
        assert provider.fetch("/prod/db/password") == "s3cret"
        client.get_parameter.assert_called_once_with(
            Name="/prod/db/password", WithDecryption=True,
        )

    def test_access_denied_wrapped_by_resolver(self):
        client = MagicMock()
        error = _client_error("AccessDeniedException", "GetParameter")
        client.get_parameter.side_effect = error

        registry = ProviderRegistry()
        registry.register(
            "aws_ssm_parameters",
            lambda config: AwsSsmParametersProvider(config, client=client),
        )
        config = Config(name="prod", secrets={"pw": "aws_ssm_parameters:/prod/pw"})
        with pytest.raises(SecretFetchError, match="aws_ssm_parameters:/prod/pw") as info:
            SecretResolver(registry).resolve(config)
        assert info.value.__cause__ is error


class TestCreateClient:
    def test_default_chain(self):
        with patch("sparta.secrets.aws.boto3.Session") as session_cls:
            create_client("ssm", {})
        session_cls.assert_called_once_with()
        session_cls.return_value.client.assert_called_once_with("ssm")

    def test_region_profile_and_endpoint(self):
        with patch("sparta.secrets.aws.boto3.Session") as session_cls:
            create_client(
                "secretsmanager",
                {"region": "eu-west-1", "profile": "ops", "endpoint_url": "http://localhost:4566"},
            )
        session_cls.assert_called_once_with(profile_name="ops")
        session_cls.return_value.client.assert_called_once_with(
            "secretsmanager", region_name="eu-west-1", endpoint_url="http://localhost:4566",
        )

    def test_provider_builds_client_from_config(self):
        with patch("sparta.secrets.aws_ssm_parameters.create_client") as factory:
            AwsSsmParametersProvider({"region_name": "us-east-1"})
        factory.assert_called_once_with("ssm", {"region_name": "us-east-1"})


class TestEnvironmentProvider:
    def test_fetch(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "postgres://x")
        assert EnvironmentProvider({}).fetch("DB_URL") == "postgres://x"

    def test_prefix(self, monkeypatch):
        monkeypatch.setenv("STAGING_DB_URL", "postgres://staging")
        assert EnvironmentProvider({"prefix": "STAGING_"}).fetch("DB_URL") == "postgres://staging"

    def test_unset_variable(self, monkeypatch):
        monkeypatch.delenv("SPARTA_UNSET_VAR", raising=False)
        with pytest.raises(LookupError, match="SPARTA_UNSET_VAR"):
            EnvironmentProvider().fetch("SPARTA_UNSET_VAR")
