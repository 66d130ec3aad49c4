"""
Script to create a volunteer or company account for local testing.

Usage:
    python -m volunteer_hub.scripts.create_local_account company \
        --name "Acme" --email acme@example.com --phone 555-0100 \
        --website https://acme.example.com --password secret

    python -m volunteer_hub.scripts.create_local_account volunteer \
        --name "Jane Doe" --handle jdoe --email jane@example.com \
        --phone 555-1234 --password secret
"""

import argparse
import asyncio

from volunteer_hub.core.database import get_session_context, init_db
from volunteer_hub.core.errors import ConflictError
from volunteer_hub.services import companies as company_service
from volunteer_hub.services import volunteers as volunteer_service
from volunteer_hub_shared.schemas.companies import CompanySignupRequest
from volunteer_hub_shared.schemas.volunteers import VolunteerSignupRequest


async def create_account(args: argparse.Namespace) -> str:
    await init_db()

    async with get_session_context() as session:
        if args.kind == "company":
            req = CompanySignupRequest(
                company_name=args.name,
                email=args.email,
                phone_number=args.phone,
                website=args.website,
                password=args.password,
            )
            return await company_service.signup(req, session)

        first_name, _, last_name = args.name.partition(" ")
        req = VolunteerSignupRequest(
            first_name=first_name,
            last_name=last_name or first_name,
            user_name=args.handle,
            email=args.email,
            phone_number=args.phone,
            password=args.password,
        )
        return await volunteer_service.signup(req, session)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a local Volunteer Hub account.")
    parser.add_argument("kind", choices=["volunteer", "company"])
    parser.add_argument("--name", required=True, help="Company name, or volunteer 'First Last'")
    parser.add_argument("--handle", help="Volunteer user name (volunteers only)")
    parser.add_argument("--email", required=True)
    parser.add_argument("--phone", required=True)
    parser.add_argument("--website", help="Company website (companies only)")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    if args.kind == "volunteer" and not args.handle:
        parser.error("--handle is required for volunteers")
    if args.kind == "company" and not args.website:
        parser.error("--website is required for companies")

    try:
        token = asyncio.run(create_account(args))
    except ConflictError as exc:
        parser.exit(1, f"{exc.detail}\n")

    print(f"Created {args.kind}. Token:\n{token}")


if __name__ == "__main__":
    main()
