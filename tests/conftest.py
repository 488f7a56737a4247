from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from storefront.core.config import Settings
from storefront.core.container import build_storefront
from storefront.payments.gateway import PaymentGateway, PaymentIntent
from storefront.utils.exceptions import GatewayError
from web.main import create_app


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway(PaymentGateway):
    """In-memory stand-in for Stripe PaymentIntents."""

    def __init__(self):
        self.intents: Dict[str, PaymentIntent] = {}
        self.create_calls: List[dict] = []
        self.error: Optional[str] = None

    def create_intent(self, amount, currency, metadata=None):
        self.create_calls.append({"amount": amount, "currency": currency, "metadata": metadata})
        if self.error:
            raise GatewayError(self.error)
        intent_id = f"pi_{len(self.intents) + 1}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_test",
            amount=amount,
            currency=currency,
            status="requires_payment_method",
            metadata=dict(metadata or {}),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_intent(self, intent_id):
        if intent_id not in self.intents:
            raise GatewayError(f"No such payment_intent: '{intent_id}'")
        return self.intents[intent_id]

    def confirm(self, intent_id: str, status: str = "succeeded") -> None:
        intent = self.intents[intent_id]
        self.intents[intent_id] = PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret,
            amount=intent.amount,
            currency=intent.currency,
            status=status,
            metadata=intent.metadata,
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        token_secret=SecretStr("test-signing-secret"),
        bcrypt_rounds=4,
        uploads_dir=tmp_path / "uploads",
    )


@pytest.fixture
def storefront(settings, gateway, clock):
    return build_storefront(settings, gateway=gateway, clock=clock)


@pytest.fixture
def client(storefront) -> TestClient:
    return TestClient(create_app(storefront=storefront))


def register_and_login(client: TestClient, email: str, password: str = "password123") -> str:
    res = client.post("/api/users/register", json={"email": email, "password": password})
    assert res.status_code == 201, res.text
    res = client.post("/api/users/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client) -> str:
    # First account on an empty store is the admin
    return register_and_login(client, "admin@example.com")


@pytest.fixture
def user_token(client, admin_token) -> str:
    return register_and_login(client, "shopper@example.com")
