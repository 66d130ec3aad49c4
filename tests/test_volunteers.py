"""
API tests for the volunteer endpoints.

Tests cover:
- Signup validation and uniqueness
- Browsing companies and the censored public view
- Profile updates (allow-list, token re-issue)
- Apply / leave, including duplicates and idempotent leave
- Account deletion
"""

from __future__ import annotations

import asyncio
import uuid

import pytest
from httpx import AsyncClient

from tests.helpers import (
    JANE,
    basic,
    bearer,
    company_id_by_name,
    signup_company,
    signup_volunteer,
)


# ---------------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------------

class TestVolunteerSignup:
    @pytest.mark.asyncio
    async def test_signup_returns_token(self, client: AsyncClient):
        token = await signup_volunteer(client)
        assert token.count(".") == 2

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient):
        resp = await client.post("/volunteer/signup", json={"firstName": "Jane"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["statusCode"] == 400
        assert body["message"].startswith("__ERROR__")
        assert "<userName>" in body["message"]
        assert "<password>" in body["message"]

    @pytest.mark.asyncio
    async def test_invalid_email(self, client: AsyncClient):
        resp = await client.post("/volunteer/signup", json={**JANE, "email": "not-an-email"})
        assert resp.status_code == 400
        assert "<email>" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, client: AsyncClient):
        await signup_volunteer(client)
        resp = await client.post("/volunteer/signup", json={**JANE, "email": "other@x.com"})
        assert resp.status_code == 409
        assert resp.json()["message"] == "__ERROR__ volunteer with that user_name already exists"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client: AsyncClient):
        await signup_volunteer(client)
        resp = await client.post("/volunteer/signup", json={**JANE, "userName": "jane2"})
        assert resp.status_code == 409
        assert "email" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_signups(self, client: AsyncClient):
        first, second = await asyncio.gather(
            client.post("/volunteer/signup", json=JANE),
            client.post("/volunteer/signup", json=JANE),
        )
        assert sorted([first.status_code, second.status_code]) == [200, 409]
        loser = first if first.status_code == 409 else second
        assert loser.json()["message"].startswith("__ERROR__ volunteer with that")

    @pytest.mark.asyncio
    async def test_multibyte_password_over_72_bytes(self, client: AsyncClient):
        # 40 characters, 80 bytes in UTF-8
        resp = await client.post("/volunteer/signup", json={**JANE, "password": "é" * 40})
        assert resp.status_code == 400
        assert resp.json()["message"].startswith("__ERROR__ invalid <password>")

    @pytest.mark.asyncio
    async def test_multibyte_password_within_72_bytes(self, client: AsyncClient):
        resp = await client.post("/volunteer/signup", json={**JANE, "password": "é" * 36})
        assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------

class TestOpportunities:
    @pytest.mark.asyncio
    async def test_lists_every_company_without_secrets(self, client: AsyncClient):
        await signup_company(client)
        await signup_company(client, companyName="Globex", email="jobs@globex.com")
        token = await signup_volunteer(client)

        resp = await client.get("/volunteer/opportunities", headers=bearer(token))
        assert resp.status_code == 200
        companies = resp.json()["companies"]
        assert [c["companyName"] for c in companies] == ["Acme", "Globex"]
        assert set(companies[0]) == {"companyId", "companyName", "email", "phoneNumber", "website"}

    @pytest.mark.asyncio
    async def test_empty_lists_for_new_volunteer(self, client: AsyncClient):
        token = await signup_volunteer(client)
        pending = await client.get("/volunteer/pending", headers=bearer(token))
        active = await client.get("/volunteer/active", headers=bearer(token))
        assert pending.json() == {"pendingCompanies": []}
        assert active.json() == {"activeCompanies": []}


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

class TestVolunteerUpdate:
    @pytest.mark.asyncio
    async def test_update_phone_keeps_token(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"phoneNumber": "555-9999"}, headers=bearer(token)
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["phoneNumber"] == "555-9999"
        assert "token" not in body

        still_valid = await client.get("/volunteer/pending", headers=bearer(token))
        assert still_valid.status_code == 200

    @pytest.mark.asyncio
    async def test_update_user_name_reissues_token(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"userName": "janed"}, headers=bearer(token)
        )
        assert resp.status_code == 200
        new_token = resp.json()["token"]
        assert resp.json()["userName"] == "janed"

        old = await client.get("/volunteer/pending", headers=bearer(token))
        assert old.status_code == 401
        new = await client.get("/volunteer/pending", headers=bearer(new_token))
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_update_password_changes_login(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"password": "n3w"}, headers=bearer(token)
        )
        assert resp.status_code == 200
        assert resp.json()["token"]

        assert (await client.get("/volunteer/login", headers=basic("jdoe", "secret"))).status_code == 401
        assert (await client.get("/volunteer/login", headers=basic("jdoe", "n3w"))).status_code == 200

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put("/volunteer/update", json={}, headers=bearer(token))
        assert resp.status_code == 400
        assert "required to update volunteer info" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_update_to_overlong_password_rejected(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"password": "é" * 40}, headers=bearer(token)
        )
        assert resp.status_code == 400
        assert "<password>" in resp.json()["message"]

        still_valid = await client.get("/volunteer/pending", headers=bearer(token))
        assert still_valid.status_code == 200

    @pytest.mark.asyncio
    async def test_non_allow_listed_field_rejected(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"tokenSeed": "mine-now"}, headers=bearer(token)
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "__ERROR__ <tokenSeed> cannot be set"

    @pytest.mark.asyncio
    async def test_update_to_taken_user_name(self, client: AsyncClient):
        await signup_volunteer(client, userName="taken", email="taken@x.com")
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"userName": "taken"}, headers=bearer(token)
        )
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_update_to_own_email_is_fine(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/update", json={"email": JANE["email"]}, headers=bearer(token)
        )
        assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Apply / leave
# ---------------------------------------------------------------------------

class TestApplyAndLeave:
    @pytest.mark.asyncio
    async def test_apply_puts_company_in_pending(self, client: AsyncClient):
        await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")

        resp = await client.put(
            "/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token)
        )
        assert resp.status_code == 200
        body = resp.json()
        assert [c["companyName"] for c in body["pendingCompanies"]] == ["Acme"]
        assert body["activeCompanies"] == []

    @pytest.mark.asyncio
    async def test_duplicate_apply_conflicts(self, client: AsyncClient):
        await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")

        await client.put("/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token))
        resp = await client.put(
            "/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token)
        )
        assert resp.status_code == 409
        assert resp.json()["message"] == "__ERROR__ duplicate volunteer."

        pending = await client.get("/volunteer/pending", headers=bearer(token))
        assert len(pending.json()["pendingCompanies"]) == 1

    @pytest.mark.asyncio
    async def test_apply_to_unknown_company(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/apply", json={"companyId": str(uuid.uuid4())}, headers=bearer(token)
        )
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_apply_with_malformed_id(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/apply", json={"companyId": "acme"}, headers=bearer(token)
        )
        assert resp.status_code == 400
        assert "<companyId>" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_apply_without_body(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put("/volunteer/apply", json={}, headers=bearer(token))
        assert resp.status_code == 400
        assert resp.json()["message"] == "__ERROR__ <companyId> required"

    @pytest.mark.asyncio
    async def test_leave_withdraws_application(self, client: AsyncClient):
        await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")
        await client.put("/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token))

        resp = await client.put(
            "/volunteer/leave", json={"companyId": acme_id}, headers=bearer(token)
        )
        assert resp.status_code == 200
        assert resp.json() == {"pendingCompanies": [], "activeCompanies": []}

    @pytest.mark.asyncio
    async def test_leave_twice_is_noop(self, client: AsyncClient):
        await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")
        await client.put("/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token))

        first = await client.put("/volunteer/leave", json={"companyId": acme_id}, headers=bearer(token))
        second = await client.put("/volunteer/leave", json={"companyId": acme_id}, headers=bearer(token))
        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()

    @pytest.mark.asyncio
    async def test_reapply_after_leaving(self, client: AsyncClient):
        await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")
        await client.put("/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token))
        await client.put("/volunteer/leave", json={"companyId": acme_id}, headers=bearer(token))

        resp = await client.put(
            "/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token)
        )
        assert resp.status_code == 200
        assert len(resp.json()["pendingCompanies"]) == 1

    @pytest.mark.asyncio
    async def test_leave_unknown_company(self, client: AsyncClient):
        token = await signup_volunteer(client)
        resp = await client.put(
            "/volunteer/leave", json={"companyId": str(uuid.uuid4())}, headers=bearer(token)
        )
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

class TestVolunteerDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_account_and_engagements(self, client: AsyncClient):
        company_token = await signup_company(client)
        token = await signup_volunteer(client)
        acme_id = await company_id_by_name(client, token, "Acme")
        await client.put("/volunteer/apply", json={"companyId": acme_id}, headers=bearer(token))

        resp = await client.delete("/volunteer/delete", headers=bearer(token))
        assert resp.status_code == 204

        gone = await client.get("/volunteer/pending", headers=bearer(token))
        assert gone.status_code == 401

        pending = await client.get("/company/pending", headers=bearer(company_token))
        assert pending.json() == {"pendingVolunteers": []}

    @pytest.mark.asyncio
    async def test_delete_leaves_other_volunteers(self, client: AsyncClient):
        other = await signup_volunteer(client, userName="bob", email="bob@x.com")
        token = await signup_volunteer(client)
        await client.delete("/volunteer/delete", headers=bearer(token))

        resp = await client.get("/volunteer/pending", headers=bearer(other))
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_handle_is_free_after_delete(self, client: AsyncClient):
        token = await signup_volunteer(client)
        await client.delete("/volunteer/delete", headers=bearer(token))
        assert await signup_volunteer(client)
