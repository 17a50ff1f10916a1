"""
Configuration Module Unit Tests
"""

import os
import json
import tempfile
from pathlib import Path
import pytest

from gst_billing.config import (
    BillingConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
)
from gst_billing.exceptions import BillingError, ValidationError


@pytest.fixture
def valid_config() -> dict:
    return {
        "supabase_url": "https://example.supabase.co",
        "supabase_anon_key": "anon-key",
        "account_id": "acct-1",
    }


class TestConfigValidator:
    """Tests for ConfigValidator"""

    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    def test_validate_valid_config(self, validator: ConfigValidator, valid_config: dict):
        """Should pass with valid configuration"""
        result = validator.validate(valid_config)
        assert result.valid is True
        assert len(result.errors) == 0

    def test_validate_missing_url(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when supabase_url is missing"""
        del valid_config["supabase_url"]
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "supabase_url" for e in result.errors)

    def test_validate_empty_anon_key(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when supabase_anon_key is empty"""
        valid_config["supabase_anon_key"] = "  "
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "supabase_anon_key" and "empty" in e.message
            for e in result.errors
        )

    def test_validate_invalid_url(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with a non-HTTP supabase_url"""
        valid_config["supabase_url"] = "not-a-url"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "supabase_url" for e in result.errors)

    def test_validate_invalid_timeout(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with negative timeout"""
        valid_config["timeout"] = -1000
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "timeout" for e in result.errors)

    def test_validate_timeout_too_low(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with timeout too low"""
        valid_config["timeout"] = 100
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "timeout" and "1000ms" in e.message
            for e in result.errors
        )

    def test_validate_retry_attempts(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with too many retry attempts"""
        valid_config["retry_attempts"] = 11
        result = validator.validate(valid_config)
        assert any(e.field == "retry_attempts" for e in result.errors)

    def test_validate_prefix_with_digits(self, validator: ConfigValidator, valid_config: dict):
        """Should reject an invoice prefix containing digits"""
        valid_config["default_invoice_prefix"] = "INV2024-"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "default_invoice_prefix" for e in result.errors)

    @pytest.mark.parametrize("prefix", ["FACTÚRA-", "ÄB-", "INV_"])
    def test_validate_prefix_outside_ascii_letters(
        self, validator: ConfigValidator, valid_config: dict, prefix: str
    ):
        """Should reject prefixes the invoice number parser cannot read back"""
        valid_config["default_invoice_prefix"] = prefix
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "default_invoice_prefix" for e in result.errors)

    def test_validate_negative_last_number(self, validator: ConfigValidator, valid_config: dict):
        """Should reject a negative starting counter"""
        valid_config["default_last_invoice_number"] = -1
        result = validator.validate(valid_config)
        assert any(e.field == "default_last_invoice_number" for e in result.errors)

    def test_validate_access_token_is_redacted(self, validator: ConfigValidator, valid_config: dict):
        """Should not echo the access token in errors"""
        valid_config["access_token"] = 12345
        result = validator.validate(valid_config)
        errors = [e for e in result.errors if e.field == "access_token"]
        assert errors and errors[0].value == "[REDACTED]"

    def test_validate_or_raise_invalid(self, validator: ConfigValidator, valid_config: dict):
        """Should raise ValidationError with invalid configuration"""
        del valid_config["supabase_anon_key"]
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise(valid_config)
        assert exc_info.value.field == "supabase_anon_key"


class TestConfigLoader:
    """Tests for ConfigLoader"""

    @pytest.fixture
    def loader(self) -> ConfigLoader:
        return ConfigLoader()

    def test_from_dict(self, loader: ConfigLoader, valid_config: dict):
        """Should return a copy of the configuration"""
        result = loader.from_dict(valid_config)
        assert result == valid_config
        assert result is not valid_config

    def test_from_environment(self, loader: ConfigLoader, monkeypatch):
        """Should load configuration from environment variables"""
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
        monkeypatch.setenv("GST_BILLING_TIMEOUT", "60000")
        monkeypatch.setenv("GST_BILLING_ENABLE_AUDIT_LOG", "false")
        monkeypatch.setenv("GST_BILLING_INVOICE_PREFIX", "BILL-")
        monkeypatch.setenv("GST_BILLING_LAST_INVOICE_NUMBER", "0")

        result = loader.from_environment()

        assert result["supabase_url"] == "https://env.supabase.co"
        assert result["supabase_anon_key"] == "env-key"
        assert result["timeout"] == 60000
        assert result["enable_audit_log"] is False
        assert result["default_invoice_prefix"] == "BILL-"
        assert result["default_last_invoice_number"] == 0

    def test_from_environment_boolean_parsing(self, loader: ConfigLoader, monkeypatch):
        """Should parse boolean values correctly"""
        monkeypatch.setenv("GST_BILLING_ENABLE_AUDIT_LOG", "true")
        result = loader.from_environment()
        assert result["enable_audit_log"] is True

        monkeypatch.setenv("GST_BILLING_ENABLE_AUDIT_LOG", "1")
        result = loader.from_environment()
        assert result["enable_audit_log"] is True

        monkeypatch.setenv("GST_BILLING_ENABLE_AUDIT_LOG", "false")
        result = loader.from_environment()
        assert result["enable_audit_log"] is False

    def test_from_environment_skips_empty(self, loader: ConfigLoader, monkeypatch):
        """Should ignore empty environment variables"""
        monkeypatch.setenv("SUPABASE_ACCESS_TOKEN", "")
        result = loader.from_environment()
        assert "access_token" not in result

    def test_merge(self, loader: ConfigLoader):
        """Should merge multiple configurations with priority"""
        base = {"supabase_url": "https://a.supabase.co", "account_id": "acct-1"}
        override = {"supabase_url": "https://b.supabase.co", "timeout": 5000}

        result = loader.merge(base, override)

        assert result["supabase_url"] == "https://b.supabase.co"
        assert result["account_id"] == "acct-1"
        assert result["timeout"] == 5000

    def test_merge_filters_none(self, loader: ConfigLoader):
        """Should not include None or blank values from overrides"""
        base = {"account_id": "acct-1", "timeout": 30000}
        override = {"account_id": "", "timeout": None}

        result = loader.merge(base, override)

        assert result["account_id"] == "acct-1"
        assert result["timeout"] == 30000

    def test_resolve_applies_defaults(self, loader: ConfigLoader, valid_config: dict):
        """Should apply default values"""
        result = loader.resolve(valid_config)

        assert result.timeout == ConfigDefaults.TIMEOUT
        assert result.retry_attempts == ConfigDefaults.RETRY_ATTEMPTS
        assert result.retry_delay == ConfigDefaults.RETRY_DELAY
        assert result.enable_audit_log == ConfigDefaults.ENABLE_AUDIT_LOG
        assert result.default_invoice_prefix == "INV-"
        assert result.default_last_invoice_number == 1000

    def test_resolve_rejects_invalid(self, loader: ConfigLoader, valid_config: dict):
        """Should raise ValidationError for an invalid configuration"""
        valid_config["supabase_url"] = "ftp://example.com"
        with pytest.raises(ValidationError):
            loader.resolve(valid_config)

    def test_from_file(self, loader: ConfigLoader, valid_config: dict):
        """Should load configuration from JSON file"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", delete=False
        ) as f:
            json.dump(valid_config, f)
            f.flush()

        try:
            result = loader.from_file(f.name)
            assert result["supabase_url"] == valid_config["supabase_url"]
        finally:
            os.unlink(f.name)

    def test_from_file_not_found(self, loader: ConfigLoader):
        """Should raise error for missing file"""
        with pytest.raises(BillingError) as exc_info:
            loader.from_file("/nonexistent/path.json")

        assert "CONFIG_FILE_NOT_FOUND" in str(exc_info.value.code)

    def test_from_file_invalid_json(self, loader: ConfigLoader):
        """Should raise a parse error for malformed JSON"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.json"
            path.write_text("{not json", encoding="utf-8")

            with pytest.raises(BillingError) as exc_info:
                loader.from_file(path)

        assert exc_info.value.code == "CONFIG_PARSE_ERROR"

    def test_from_file_requires_object(self, loader: ConfigLoader):
        """Should reject a JSON document that is not an object"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "list.json"
            path.write_text("[1, 2]", encoding="utf-8")

            with pytest.raises(BillingError) as exc_info:
                loader.from_file(path)

        assert exc_info.value.code == "CONFIG_PARSE_ERROR"

    def test_load_from_config(self, loader: ConfigLoader, valid_config: dict):
        """Should load and resolve configuration from dict"""
        result = loader.load(config=valid_config, env=False)

        assert result.supabase_url == valid_config["supabase_url"]
        assert result.account_id == "acct-1"
        assert result.get_rest_url() == "https://example.supabase.co/rest/v1"

    def test_load_priority(self, loader: ConfigLoader, valid_config: dict, monkeypatch):
        """Should let programmatic values override environment values"""
        monkeypatch.setenv("GST_BILLING_INVOICE_PREFIX", "ENV-")
        monkeypatch.setenv("GST_BILLING_RETRY_ATTEMPTS", "5")
        valid_config["default_invoice_prefix"] = "DICT-"

        result = loader.load(config=valid_config)

        assert result.default_invoice_prefix == "DICT-"
        assert result.retry_attempts == 5

    def test_create_template(self, loader: ConfigLoader):
        """Should create template configuration file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            template_path = Path(tmpdir) / "config" / "template.json"
            loader.create_template(template_path)

            assert template_path.exists()

            with open(template_path) as f:
                template = json.load(f)

            assert "supabase_url" in template
            assert "supabase_anon_key" in template
            assert template["default_invoice_prefix"] == "INV-"


class TestBillingConfig:
    """Tests for BillingConfig Pydantic model"""

    def test_create_valid_config(self, valid_config: dict):
        """Should create config with valid data"""
        config = BillingConfig(**valid_config)
        assert config.supabase_anon_key == "anon-key"
        assert config.access_token is None

    def test_strips_trailing_slash(self, valid_config: dict):
        """Should normalise the backend URL"""
        valid_config["supabase_url"] = "https://example.supabase.co/"
        config = BillingConfig(**valid_config)
        assert config.supabase_url == "https://example.supabase.co"
        assert config.get_rest_url() == "https://example.supabase.co/rest/v1"

    def test_invalid_url(self, valid_config: dict):
        """Should reject invalid supabase_url"""
        valid_config["supabase_url"] = "not-a-url"
        with pytest.raises(ValueError):
            BillingConfig(**valid_config)

    def test_timeout_range(self, valid_config: dict):
        """Should reject a timeout outside the allowed range"""
        valid_config["timeout"] = 500
        with pytest.raises(ValueError):
            BillingConfig(**valid_config)

    def test_missing_anon_key(self, valid_config: dict):
        """Should require the anon key"""
        del valid_config["supabase_anon_key"]
        with pytest.raises(ValueError):
            BillingConfig(**valid_config)
