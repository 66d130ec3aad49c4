"""Request payloads and small client helpers shared across API tests."""

from __future__ import annotations

import base64

from httpx import AsyncClient

JANE = {
    "firstName": "Jane",
    "lastName": "Doe",
    "userName": "jdoe",
    "email": "jane@x.com",
    "phoneNumber": "555-1234",
    "password": "secret",
}

ACME = {
    "companyName": "Acme",
    "email": "hr@acme.com",
    "phoneNumber": "555-0100",
    "website": "https://acme.example.com",
    "password": "hunter2",
}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def signup_volunteer(client: AsyncClient, **overrides) -> str:
    resp = await client.post("/volunteer/signup", json={**JANE, **overrides})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


async def signup_company(client: AsyncClient, **overrides) -> str:
    resp = await client.post("/company/signup", json={**ACME, **overrides})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


async def company_id_by_name(client: AsyncClient, volunteer_token: str, name: str) -> str:
    resp = await client.get("/volunteer/opportunities", headers=bearer(volunteer_token))
    assert resp.status_code == 200, resp.text
    for company in resp.json()["companies"]:
        if company["companyName"] == name:
            return company["companyId"]
    raise AssertionError(f"company {name!r} not listed")


def basic(login: str, password: str) -> dict[str, str]:
    encoded = base64.b64encode(f"{login}:{password}".encode()).decode()
    return {"Authorization": f"Basic {encoded}"}
