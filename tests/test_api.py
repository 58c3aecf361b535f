import pytest
from httpx import ASGITransport, AsyncClient

from api.database.migrations import MigrationRunner
from services.shop import get_shop_service


async def test_live(client):
    r = await client.get("/live")

    assert r.status_code == 200
    assert r.json() == {"ok": True}


async def test_ready(client, app):
    r = await client.get("/ready")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    # миграции еще не применены
    app.state.migrations = MigrationRunner(enabled=True)
    r = await client.get("/ready")
    assert r.status_code == 503
    assert r.json() == {"ok": False}


async def test_auth_issues_token(client):
    r = await client.post("/api/auth", json={"username": "alice", "password": "secret"})

    assert r.status_code == 200
    assert r.json()["token"]


async def test_auth_wrong_password(client, login):
    await login("alice", "secret")

    r = await client.post("/api/auth", json={"username": "alice", "password": "wrong"})

    assert r.status_code == 401
    assert "errors" in r.json()


@pytest.mark.parametrize("body", [
    {"username": "alice"},
    {"password": "secret"},
    {"username": "", "password": "secret"},
    {},
])
async def test_auth_bad_request(client, body):
    r = await client.post("/api/auth", json=body)

    assert r.status_code == 400
    assert r.json()["errors"].startswith("invalid request")


async def test_auth_rejects_password_longer_than_bcrypt_limit(client):
    r = await client.post("/api/auth", json={"username": "alice", "password": "x" * 200})

    assert r.status_code == 400
    assert r.json()["errors"].startswith("invalid request")

    # 72 байта - еще допустимо, в том числе многобайтовыми символами
    r = await client.post("/api/auth", json={"username": "bob", "password": "я" * 36})
    assert r.status_code == 200
    r = await client.post("/api/auth", json={"username": "carol", "password": "я" * 37})
    assert r.status_code == 400


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Token abc"},
    {"Authorization": "Bearer "},
    {"Authorization": "Bearer not-a-jwt"},
])
async def test_protected_routes_require_token(client, headers):
    for method, url in [("GET", "/api/info"), ("GET", "/api/buy/cup"), ("POST", "/api/sendCoin")]:
        r = await client.request(method, url, headers=headers, json={"toUser": "bob", "amount": 1})

        assert r.status_code == 401, url
        assert r.headers["WWW-Authenticate"] == "Bearer"
        assert "errors" in r.json()


async def test_new_user_info(client, login):
    headers = await login("alice")

    r = await client.get("/api/info", headers=headers)

    assert r.status_code == 200
    assert r.json() == {
        "coins": 1000,
        "inventory": [],
        "coinHistory": {"received": [], "sent": []},
    }


async def test_send_coin_and_buy(client, login):
    alice = await login("alice")
    bob = await login("bob")

    r = await client.post("/api/sendCoin", headers=alice, json={"toUser": "bob", "amount": 300})
    assert r.status_code == 200

    r = await client.get("/api/buy/cup", headers=alice)
    assert r.status_code == 200

    r = await client.get("/api/info", headers=alice)
    assert r.json() == {
        "coins": 550,
        "inventory": [{"type": "cup", "quantity": 1}],
        "coinHistory": {"received": [], "sent": [{"toUser": "bob", "amount": 300}]},
    }

    r = await client.get("/api/info", headers=bob)
    assert r.json() == {
        "coins": 1300,
        "inventory": [],
        "coinHistory": {"received": [{"fromUser": "alice", "amount": 300}], "sent": []},
    }


async def test_history_is_newest_first(client, login):
    alice = await login("alice")
    await login("bob")

    for amount in (1, 2, 3):
        r = await client.post("/api/sendCoin", headers=alice, json={"toUser": "bob", "amount": amount})
        assert r.status_code == 200

    r = await client.get("/api/info", headers=alice)
    assert [t["amount"] for t in r.json()["coinHistory"]["sent"]] == [3, 2, 1]


@pytest.mark.parametrize("body", [
    {"toUser": "alice", "amount": 10},
    {"toUser": "nobody", "amount": 10},
    {"toUser": "bob", "amount": 1001},
    {"toUser": "bob", "amount": 0},
    {"toUser": "bob", "amount": -3},
    {"toUser": "bob"},
    {"amount": 10},
    {"toUser": "bob", "amount": "lots"},
    {"toUser": "bob", "amount": "10"},
    {"toUser": "bob", "amount": True},
    {"toUser": "bob", "amount": 10.0},
])
async def test_send_coin_rejected(client, login, body):
    alice = await login("alice")
    bob = await login("bob")

    r = await client.post("/api/sendCoin", headers=alice, json=body)

    assert r.status_code == 400
    assert "errors" in r.json()
    for headers in (alice, bob):
        info = (await client.get("/api/info", headers=headers)).json()
        assert info["coins"] == 1000
        assert info["coinHistory"] == {"received": [], "sent": []}


async def test_buy_same_item_twice(client, login):
    alice = await login("alice")

    for _ in range(2):
        r = await client.get("/api/buy/cup", headers=alice)
        assert r.status_code == 200

    info = (await client.get("/api/info", headers=alice)).json()
    assert info["coins"] == 700
    assert info["inventory"] == [{"type": "cup", "quantity": 2}]


async def test_buy_without_item(client, login):
    alice = await login("alice")

    for url in ("/api/buy/", "/api/buy/%20"):
        r = await client.get(url, headers=alice)

        assert r.status_code == 400, url
        assert r.json() == {"errors": "item parameter is required"}


async def test_buy_unknown_item(client, login):
    alice = await login("alice")

    r = await client.get("/api/buy/yacht", headers=alice)

    assert r.status_code == 400
    assert "errors" in r.json()


async def test_buy_without_enough_coins(client, login):
    alice = await login("alice")
    await login("bob")
    r = await client.post("/api/sendCoin", headers=alice, json={"toUser": "bob", "amount": 600})
    assert r.status_code == 200

    r = await client.get("/api/buy/pink-hoody", headers=alice)

    assert r.status_code == 400
    info = (await client.get("/api/info", headers=alice)).json()
    assert info["coins"] == 400
    assert info["inventory"] == []


async def test_unexpected_error_is_500(app, login):
    alice = await login("alice")

    class BrokenShop:
        async def purchase(self, user, merch_name):
            raise RuntimeError("disk on fire")

    app.dependency_overrides[get_shop_service] = lambda: BrokenShop()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.get("/api/buy/cup", headers=alice)

    assert r.status_code == 500
    assert r.json() == {"errors": "internal server error"}
