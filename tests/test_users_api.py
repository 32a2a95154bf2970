from conftest import CLIENT_ID, MANICURIST_ID, at

NEW_CLIENT = {
    "first_name": "Valentina",
    "last_name": "Ruiz",
    "email": "Valentina@Example.com",
    "phone_number": "+57 300 555 1234",
    "password": "manicure-2024",
}


def test_register_then_login(client, salon):
    registered = client.post("/auth/register", json=NEW_CLIENT)
    assert registered.status_code == 201
    user_id = registered.json()["user_id"]

    login = client.post("/auth/login", json={"email": "valentina@example.com", "password": "manicure-2024"})
    assert login.status_code == 200
    body = login.json()
    assert body["user"]["user_id"] == user_id
    assert body["user"]["role_id"] == 3
    assert body["user"]["phone_number"] == "+573005551234"

    profile = client.get("/users/profile", headers={"Authorization": f"Bearer {body['token']}"})
    assert profile.status_code == 200
    assert profile.json()["email"] == "valentina@example.com"


def test_duplicate_email_rejected(client, salon):
    client.post("/auth/register", json=NEW_CLIENT)
    response = client.post("/auth/register", json={**NEW_CLIENT, "email": "valentina@example.com"})
    assert response.status_code == 400
    assert response.json()["code"] == "EMAIL_TAKEN"


def test_register_validates_fields(client, salon):
    assert client.post("/auth/register", json={**NEW_CLIENT, "email": "nope"}).status_code == 400
    assert client.post("/auth/register", json={**NEW_CLIENT, "password": "short"}).status_code == 400
    assert client.post("/auth/register", json={**NEW_CLIENT, "phone_number": "12"}).status_code == 400


def test_wrong_password(client, salon):
    client.post("/auth/register", json=NEW_CLIENT)
    response = client.post("/auth/login", json={"email": NEW_CLIENT["email"], "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_update_profile(client, salon, as_client):
    response = client.put(
        "/users/profile",
        json={"first_name": "Sofi", "last_name": "Mejia", "phone_number": "310-987-6543"},
        headers=as_client,
    )
    assert response.status_code == 200
    assert response.json()["first_name"] == "Sofi"
    assert response.json()["phone_number"] == "3109876543"


def test_manicurist_directory(client, salon, as_client):
    manicurists = client.get("/users/manicurists", headers=as_client).json()
    assert sorted(m["user_id"] for m in manicurists) == [7, 8]


def test_admin_lists_by_role(client, salon, as_admin, as_client):
    assert client.get("/users/all", headers=as_client).status_code == 403

    clients = client.get("/users/all", params={"role_id": 3}, headers=as_admin).json()
    assert sorted(u["user_id"] for u in clients) == [20, 21]

    assert client.get("/users/all", params={"role_id": 9}, headers=as_admin).status_code == 400


def test_admin_promotes_user(client, salon, as_admin):
    payload = {"first_name": "Elena", "last_name": "Diaz", "role_id": 2}
    response = client.put("/users/21", json=payload, headers=as_admin)
    assert response.status_code == 200
    assert response.json()["role_id"] == 2

    assert client.put("/users/21", json={**payload, "role_id": 4}, headers=as_admin).status_code == 400
    assert client.put("/users/404", json=payload, headers=as_admin).status_code == 404


def test_admin_cannot_delete_self(client, salon, as_admin):
    assert client.delete("/users/1", headers=as_admin).status_code == 400


def test_user_with_appointments_kept(client, salon, as_admin, as_client):
    booking = {"manicurist_id": MANICURIST_ID, "service_id": 1, "start_time": at(10).isoformat()}
    client.post("/appointments", json=booking, headers=as_client)

    response = client.delete(f"/users/{CLIENT_ID}", headers=as_admin)
    assert response.status_code == 400
    assert response.json()["code"] == "USER_IN_USE"


def test_delete_unused_user(client, salon, as_admin):
    assert client.delete("/users/21", headers=as_admin).status_code == 200
    assert client.delete("/users/21", headers=as_admin).status_code == 404


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200
