import os
from unittest.mock import patch

import pytest

from storefront.core.config import load_settings
from storefront.core.container import build_storefront
from storefront.utils.exceptions import ConfigError, GatewayError


def test_token_secret_required(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)  # no stray .env
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ConfigError):
            load_settings()


def test_settings_from_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    env = {
        "TOKEN_SECRET": "env-secret",
        "BCRYPT_ROUNDS": "6",
        "FIRST_USER_IS_ADMIN": "false",
        "REQUIRE_CONFIRMED_PAYMENT": "0",
        "CURRENCY": "EUR",
        "STRIPE_SECRET_KEY": "sk_test_123",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = load_settings()

    assert settings.token_secret.get_secret_value() == "env-secret"
    assert settings.bcrypt_rounds == 6
    assert settings.first_user_is_admin is False
    assert settings.require_confirmed_payment is False
    assert settings.currency == "eur"
    assert settings.token_ttl_seconds == 3600
    # Secrets are masked in any rendering of the settings
    assert "env-secret" not in repr(settings)
    assert "sk_test_123" not in str(settings)


def test_invalid_numbers_are_config_errors(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with patch.dict(os.environ, {"TOKEN_SECRET": "s", "BCRYPT_ROUNDS": "2"}, clear=True):
        with pytest.raises(ConfigError):
            load_settings()


def test_missing_stripe_key_only_disables_checkout(settings):
    storefront = build_storefront(settings)

    assert [p.id for p in storefront.catalog.list_products()] == [1, 2, 3]
    user = storefront.credentials.register("nokey@example.com", "pw")
    assert storefront.credentials.authenticate("nokey@example.com", "pw") == user

    with pytest.raises(GatewayError):
        storefront.reconciler.create_payment_intent(user.id, [{"id": 1}])
    with pytest.raises(GatewayError):
        storefront.reconciler.record_order(user.id, [{"id": 1}], "pi_123")
