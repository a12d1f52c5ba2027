"""Claim engine: single active claim per item, owner exclusion, races."""

import asyncio

import pytest

from giftreservoir.core.database import AsyncSessionLocal
from giftreservoir.core.exceptions import AlreadyClaimedException, NotFoundException
from giftreservoir.services.claim_service import ClaimService, ClaimState, ClaimStateMachine


async def test_guest_claims_item(client, guest, item):
    response = await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)

    assert response.status_code == 201
    body = response.json()
    assert body["itemId"] == item["id"]
    assert body["claimerUserId"] == "guest-1"
    assert body["claimedAt"]


async def test_owner_cannot_claim_own_item(client, owner, item):
    response = await client.post(f"/api/v1/items/{item['id']}/claim", headers=owner)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SELF_CLAIM_FORBIDDEN"


async def test_owner_gets_self_claim_error_even_when_claimed(client, owner, guest, item):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)

    response = await client.post(f"/api/v1/items/{item['id']}/claim", headers=owner)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SELF_CLAIM_FORBIDDEN"


async def test_second_claim_is_rejected(client, guest, other_guest, item):
    first = await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)
    second = await client.post(f"/api/v1/items/{item['id']}/claim", headers=other_guest)
    repeat = await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "ALREADY_CLAIMED"
    assert repeat.status_code == 400


async def test_claim_missing_item(client, guest):
    response = await client.post("/api/v1/items/31337/claim", headers=guest)
    assert response.status_code == 404


async def test_claim_requires_authentication(client, item):
    response = await client.post(f"/api/v1/items/{item['id']}/claim")
    assert response.status_code == 401


async def test_only_claimant_can_unclaim(client, owner, guest, other_guest, item):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)

    by_other = await client.delete(f"/api/v1/items/{item['id']}/claim", headers=other_guest)
    by_owner = await client.delete(f"/api/v1/items/{item['id']}/claim", headers=owner)

    assert by_other.status_code == 404
    assert by_owner.status_code == 404

    by_claimant = await client.delete(f"/api/v1/items/{item['id']}/claim", headers=guest)
    assert by_claimant.status_code == 204

    again = await client.delete(f"/api/v1/items/{item['id']}/claim", headers=guest)
    assert again.status_code == 404


async def test_unclaimed_item_can_be_claimed_by_someone_else(client, guest, other_guest, item):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)
    await client.delete(f"/api/v1/items/{item['id']}/claim", headers=guest)

    response = await client.post(f"/api/v1/items/{item['id']}/claim", headers=other_guest)

    assert response.status_code == 201
    assert response.json()["claimerUserId"] == "guest-2"


async def test_concurrent_claims_have_one_winner(client, guest, other_guest, item):
    # Register both users before racing
    await client.get("/api/v1/auth/user", headers=guest)
    await client.get("/api/v1/auth/user", headers=other_guest)

    async def attempt(user_id):
        async with AsyncSessionLocal() as session:
            try:
                await ClaimService(session).claim(user_id, item["id"])
            except AlreadyClaimedException:
                return False
            return True

    results = await asyncio.gather(
        attempt("guest-1"), attempt("guest-2"), attempt("guest-1"), attempt("guest-2")
    )

    assert results.count(True) == 1


async def test_lost_race_reports_already_claimed(client, db, guest, other_guest, item, monkeypatch):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)
    await client.get("/api/v1/auth/user", headers=other_guest)

    async def stale_read(self, item_id):
        return None

    monkeypatch.setattr(ClaimService, "get_claim", stale_read)

    with pytest.raises(AlreadyClaimedException):
        await ClaimService(db).claim("guest-2", item["id"])


async def test_service_claim_missing_item(db):
    with pytest.raises(NotFoundException):
        await ClaimService(db).claim("guest-1", 123456)


def test_claim_state_machine():
    machine = ClaimStateMachine()

    assert machine.can_transition(ClaimState.UNCLAIMED, ClaimState.CLAIMED)
    assert machine.can_transition(ClaimState.CLAIMED, ClaimState.UNCLAIMED)
    assert not machine.can_transition(ClaimState.CLAIMED, ClaimState.CLAIMED)
    assert not machine.can_transition(ClaimState.UNCLAIMED, ClaimState.UNCLAIMED)
    assert machine.state_of(None) == ClaimState.UNCLAIMED
