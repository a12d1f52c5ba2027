"""Health checks, token decoding, error envelopes and input normalizers."""

from datetime import timedelta

import pytest
from jose import jwt
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from giftreservoir.core.config import settings
from giftreservoir.core.exceptions import UnauthorizedException
from giftreservoir.core.security import SecurityUtils
from giftreservoir.middleware.rate_limit import limiter
from giftreservoir.schemas.wishlist import ItemCreate, WishlistCreate, WishlistUpdate
from giftreservoir.services.user_service import profile_from_claims
from giftreservoir.services.wishlist_service import WishlistService
from giftreservoir.utils.validators import normalize_text, validate_optional_url


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_database_health(client):
    response = await client.get("/health/db")
    assert response.status_code == 200


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_error_envelope_carries_request_id(client):
    response = await client.get("/api/v1/wishlists", headers={"X-Request-ID": "req-456"})

    error = response.json()["error"]
    assert error["code"] == "UNAUTHORIZED"
    assert error["message"]
    assert error["request_id"] == "req-456"


async def test_security_headers(client):
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_decode_roundtrip():
    token = SecurityUtils.create_access_token({"sub": "user-9"})
    assert SecurityUtils.decode_token(token)["sub"] == "user-9"


def test_decode_rejects_expired_token():
    token = SecurityUtils.create_access_token({"sub": "user-9"}, timedelta(minutes=-5))

    with pytest.raises(UnauthorizedException):
        SecurityUtils.decode_token(token)


def test_decode_rejects_wrong_signature():
    token = jwt.encode({"sub": "user-9", "type": "access"}, "other-key", algorithm=settings.ALGORITHM)

    with pytest.raises(UnauthorizedException):
        SecurityUtils.decode_token(token)


def test_decode_requires_subject_and_type():
    no_sub = jwt.encode({"type": "access"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    refresh = jwt.encode(
        {"sub": "user-9", "type": "refresh"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )

    with pytest.raises(UnauthorizedException):
        SecurityUtils.decode_token(no_sub)
    with pytest.raises(UnauthorizedException):
        SecurityUtils.decode_token(refresh)


def test_normalize_text():
    assert normalize_text("  Big\u200b   box \n") == "Big box"


def test_validate_optional_url():
    assert validate_optional_url(None) is None
    assert validate_optional_url("   ") is None
    assert validate_optional_url("https://example.com/a?b=1") == "https://example.com/a?b=1"

    with pytest.raises(ValueError):
        validate_optional_url("ftp//nope")


def test_validate_optional_url_accepts_any_scheme():
    assert validate_optional_url("ftp://files.example.com/gift.pdf") == "ftp://files.example.com/gift.pdf"

    with pytest.raises(ValueError):
        validate_optional_url("/relative/path")


def test_schemas_accept_camel_case():
    item = ItemCreate.model_validate({"name": " Lamp ", "imageUrl": "https://example.com/l.png"})

    assert item.name == "Lamp"
    assert item.image_url == "https://example.com/l.png"


def test_update_schema_tracks_sent_fields():
    assert WishlistUpdate.model_validate({"description": ""}).changes() == {"description": None}
    assert WishlistUpdate.model_validate({}).changes() == {}


def test_create_schema_forbids_unknown_fields():
    with pytest.raises(ValidationError):
        WishlistCreate.model_validate({"name": "A", "ownerUserId": "someone-else"})


def test_profile_from_claims_drops_bad_email():
    profile = profile_from_claims({"sub": "u", "email": "not-an-email", "first_name": "Ann"})

    assert "email" not in profile
    assert profile["first_name"] == "Ann"


@pytest.fixture
def rate_limited(monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield limiter
    limiter.reset()


async def test_store_failure_hides_internals(client, owner, monkeypatch):
    async def broken(self, user_id):
        raise SQLAlchemyError("secret detail")

    monkeypatch.setattr(WishlistService, "list_wishlists", broken)

    response = await client.get("/api/v1/wishlists", headers=owner)

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret detail" not in response.text


async def test_claim_endpoint_is_rate_limited(client, guest, item, rate_limited):
    statuses = []
    for _ in range(40):
        response = await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)
        statuses.append(response.status_code)
        if response.status_code == 429:
            break

    assert statuses[-1] == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
    assert statuses[0] == 201
    assert set(statuses[1:-1]) <= {400}


async def test_metrics_expose_claim_outcomes(client, owner, guest, item):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=owner)

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'claim_attempts_total{outcome="claimed"}' in response.text
    assert 'claim_attempts_total{outcome="self_claim"}' in response.text
    assert "http_requests_total" in response.text
