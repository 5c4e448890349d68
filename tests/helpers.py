from faker import Faker

from app.core.security import create_access_token

fake = Faker()

TEST_PASSWORD = "testpassword123"


def headers_for(user: dict) -> dict:
    token = create_access_token(user_id=str(user["id"]), email=user["email"])
    return {"Authorization": f"Bearer {token}"}


def contact_payload(**overrides) -> dict:
    payload = {
        "name": fake.name(),
        "email": fake.unique.email(),
        "phone": fake.unique.numerify("+1##########"),
        "address": fake.street_address(),
    }
    payload.update(overrides)
    return payload
