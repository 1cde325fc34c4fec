"""
Pytest configuration and fixtures.
"""
import hashlib
import hmac
import json
import os
import time
import uuid
from typing import Any, Generator, Optional

# Settings are read at import time; point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_fake_key_for_testing"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_fake_secret"
os.environ["FRONTEND_URL"] = "http://dashboard.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, get_db
from models.company import Company
from models.product import Product
from models.users import User, UserSubscription
from utils.credits import grant_credits
from utils.stripe_client import stripe_client
from utils.tokenJWT import create_access_token


@pytest.fixture
def engine():
    """In-memory database shared by the app and the test session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(engine) -> Generator[TestClient, Any, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, email: str, **flags) -> User:
    user = User(email=email, first_name=email.split("@")[0].title(), last_name="Tester", partner_id=1, **flags)
    db.add(user)
    db.flush()
    db.add(UserSubscription(user_id=user.id))
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def admin(db_session) -> User:
    return make_user(db_session, "admin@newsworthy.test", is_admin=True)


@pytest.fixture
def editor(db_session) -> User:
    return make_user(db_session, "editor@newsworthy.test", is_editor=True)


@pytest.fixture
def customer(db_session) -> User:
    return make_user(db_session, "customer@newsworthy.test")


@pytest.fixture
def other_customer(db_session) -> User:
    return make_user(db_session, "someone.else@newsworthy.test")


@pytest.fixture
def company(db_session, customer) -> Company:
    c = Company(uuid=str(uuid.uuid4()), user_id=customer.id, company_name="Acme Robotics")
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def funded_company(db_session, customer, company) -> Company:
    """Company holding two unconsumed press release credits."""
    grant_credits(db_session, user_id=customer.id, company_id=company.id, credits=2, notes="Test grant")
    db_session.commit()
    return company


@pytest.fixture
def pr_bundle(db_session) -> Product:
    """5-credit press release bundle priced at $50.00."""
    p = Product(
        partner_id=1,
        short_name="pr5",
        display_name="5 Press Release Bundle",
        description="Five press releases",
        price=5000,
        product_type="pr",
        product_credits=5,
        is_active=True,
    )
    db_session.add(p)
    db_session.commit()
    db_session.refresh(p)
    return p


def sign_payload(payload: str, secret: Optional[str] = None, timestamp: Optional[int] = None) -> str:
    """Build a Stripe-Signature header for a raw webhook body."""
    secret = secret if secret is not None else stripe_client.webhook_secret
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def post_event(client: TestClient, event: dict, signature: Optional[str] = None):
    payload = json.dumps(event)
    return client.post(
        "/payment/webhook",
        content=payload,
        headers={
            "Content-Type": "application/json",
            "Stripe-Signature": signature or sign_payload(payload),
        },
    )
