"""CLI unit tests for the AIP CLI."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from ai_pricing.cli import app
from ai_pricing.cli.utils.helpers import ExitCode
from ai_pricing.errors import ConfigurationError, HttpStatusError, TransportError
from ai_pricing.models import PricingDocument

LOADER = "ai_pricing.cli.utils.helpers.get_ai_pricing"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env():
    """Run every CLI test without AIP_* variables and with a wide terminal."""
    cleaned = {k: v for k, v in os.environ.items() if not k.startswith("AIP_")}
    cleaned["COLUMNS"] = "200"
    with patch.dict(os.environ, cleaned, clear=True):
        yield


class TestUrl:
    """Test the url command."""

    def test_default_env_is_dev(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["url"])

        assert result.exit_code == 0
        assert result.output.strip() == "https://images.bookcicle.com/ai/ai-pricing-dev.json"

    def test_prod(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--env", "prod", "url"])

        assert result.exit_code == 0
        assert result.output.strip() == "https://images.bookcicle.com/ai/ai-pricing.json"

    def test_env_var_precedence(self, cli_runner: CliRunner) -> None:
        with patch.dict(os.environ, {"AIP_ENV": "staging"}):
            result = cli_runner.invoke(app, ["url"])

        assert result.exit_code == 0
        assert result.output.strip().endswith("/ai-pricing-staging.json")

    def test_invalid_timeout_is_usage_error(self, cli_runner: CliRunner) -> None:
        with patch.dict(os.environ, {"AIP_TIMEOUT": "abc"}):
            result = cli_runner.invoke(app, ["url"])

        assert result.exit_code == ExitCode.INVALID_USAGE
        assert "Error: Invalid timeout: 'abc'" in result.output


class TestFetch:
    """Test the fetch command."""

    @patch(LOADER)
    def test_summary_json(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "json", "fetch"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["metered_price_id"] == "price_1QmeteredAbc"
        assert data["provider_count"] == 2
        assert data["model_count"] == 3
        assert data["cached"] is True
        assert data["env"] == "dev"
        mock_load.assert_called_once_with("dev", bust_cache=False)

    @patch(LOADER)
    def test_bust_cache(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--env", "prod", "--format", "json", "fetch", "--bust-cache"])

        assert result.exit_code == 0
        assert json.loads(result.output)["cached"] is False
        mock_load.assert_called_once_with("prod", bust_cache=True)

    @patch(LOADER)
    def test_full_yaml(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "yaml", "fetch", "--full"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["meteredPriceId"] == "price_1QmeteredAbc"
        assert [p["key"] for p in data["providers"]] == ["openai", "bedrock"]

    @patch(LOADER)
    def test_full_requires_structured_format(
        self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument
    ) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "table", "fetch", "--full"])

        assert result.exit_code == ExitCode.INVALID_USAGE
        mock_load.assert_not_called()

    @patch(LOADER)
    def test_summary_table(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "fetch"])

        assert result.exit_code == 0
        assert "price_1QmeteredAbc" in result.output
        assert "ai-pricing-dev.json" in result.output

    @patch(LOADER)
    def test_http_error_exit_code(self, mock_load: MagicMock, cli_runner: CliRunner) -> None:
        mock_load.side_effect = HttpStatusError("HTTP error 404", status_code=404, url="https://x/ai-pricing-qa.json")

        result = cli_runner.invoke(app, ["--env", "qa", "fetch"])

        assert result.exit_code == ExitCode.FETCH_ERROR
        assert "HTTP error 404" in result.output
        assert "ai-pricing-qa.json" in result.output

    @patch(LOADER)
    def test_transport_error_exit_code(self, mock_load: MagicMock, cli_runner: CliRunner) -> None:
        mock_load.side_effect = TransportError("Connection refused")

        result = cli_runner.invoke(app, ["fetch"])

        assert result.exit_code == ExitCode.FETCH_ERROR
        assert "Connection refused" in result.output


class TestProviders:
    """Test providers commands."""

    @patch(LOADER)
    def test_list_json_keeps_order(
        self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument
    ) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "json", "providers", "list"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 2
        assert [p["key"] for p in data["providers"]] == ["openai", "bedrock"]
        assert data["providers"][0]["markup"]["text_percentage"] == 0.15
        assert data["providers"][0]["model_count"] == 2

    @patch(LOADER)
    def test_list_table(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "providers", "list"])

        assert result.exit_code == 0
        assert "openai" in result.output
        assert "bedrock" in result.output
        assert "15%" in result.output


class TestModels:
    """Test models commands."""

    @patch(LOADER)
    def test_list_for_provider(
        self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument
    ) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "json", "models", "list", "--provider", "openai"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 2
        gpt, dalle = data["models"]
        assert gpt["key"] == "gpt-4o"
        assert gpt["pricing"]["input_per_1m"] == 2.5
        assert gpt["pricing"]["cached_input_per_1m"] == 1.25
        assert dalle["type"] == "image"
        assert dalle["pricing"]["min_cost_per_image"] == 0.04
        assert dalle["pricing"]["max_cost_per_image"] == 0.12
        assert dalle["pricing"]["sizes"] == ["1024x1024", "1792x1024", "1792x1024"]

    @patch(LOADER)
    def test_list_all(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "json", "models", "list"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(m["provider"], m["key"]) for m in data["models"]] == [
            ("openai", "gpt-4o"),
            ("openai", "dall-e-3"),
            ("bedrock", "claude-sonnet"),
        ]

    @patch(LOADER)
    def test_unknown_provider(
        self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument
    ) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["models", "list", "--provider", "mistral"])

        assert result.exit_code == ExitCode.PROVIDER_NOT_FOUND
        assert "mistral" in result.output
        assert "openai" in result.output

    @patch(LOADER)
    def test_list_table(self, mock_load: MagicMock, cli_runner: CliRunner, sample_document: PricingDocument) -> None:
        mock_load.return_value = sample_document

        result = cli_runner.invoke(app, ["--format", "table", "--no-color", "models", "list"])

        assert result.exit_code == 0
        assert "gpt-4o" in result.output
        assert "$2.5" in result.output


class TestMisc:
    """Test env and version output."""

    def test_env_json(self, cli_runner: CliRunner) -> None:
        with patch.dict(os.environ, {"AIP_TIMEOUT": "12"}):
            result = cli_runner.invoke(app, ["--format", "json", "env"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["environment_variables"]["AIP_TIMEOUT"] == {"value": "12", "set": True}
        assert data["environment_variables"]["AIP_BASE_URL"]["set"] is False

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "AIP CLI version" in result.output


class TestConfigurationErrors:
    """Invalid AIP_* settings are reported as usage errors."""

    @pytest.mark.parametrize(
        "args",
        [
            ["--format", "json", "fetch"],
            ["--format", "json", "providers", "list"],
            ["--format", "json", "models", "list"],
        ],
    )
    def test_invalid_timeout(self, cli_runner: CliRunner, args: list) -> None:
        with patch.dict(os.environ, {"AIP_TIMEOUT": "abc"}):
            result = cli_runner.invoke(app, args)

        assert result.exit_code == ExitCode.INVALID_USAGE
        assert "Invalid timeout" in result.output
        assert not isinstance(result.exception, ConfigurationError)

    def test_empty_base_url(self, cli_runner: CliRunner) -> None:
        with patch.dict(os.environ, {"AIP_BASE_URL": "   "}):
            result = cli_runner.invoke(app, ["--format", "json", "providers", "list"])

        assert result.exit_code == ExitCode.INVALID_USAGE
        assert "base_url must not be empty" in result.output
