"""Demo data seeding tests."""

from fleamarket.models import Item, User
from fleamarket.services.passwords import PasswordHasher
from scripts.seed_demo_data import DEMO_EMAIL, DEMO_ITEMS, DEMO_PASSWORD, seed_demo_data


def test_seed_creates_demo_user_and_items(db):
    user = seed_demo_data(db)

    assert user.email == DEMO_EMAIL
    assert PasswordHasher().verify(DEMO_PASSWORD, user.password_hash)
    assert db.query(Item).filter_by(user_id=user.id).count() == len(DEMO_ITEMS)


def test_seed_is_repeatable(db):
    seed_demo_data(db)
    seed_demo_data(db)

    assert db.query(User).filter_by(email=DEMO_EMAIL).count() == 1
    assert db.query(Item).count() == len(DEMO_ITEMS)


def test_demo_user_can_log_in(client, db):
    seed_demo_data(db)

    response = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    assert response.status_code == 200
    token = response.json()["token"]

    response = client.get("/items")
    assert len(response.json()["data"]) == len(DEMO_ITEMS)

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.json()["email"] == DEMO_EMAIL
