API = "/api/v1"


async def signup(client, name="Alice", email="alice@example.com", password="s3cret-pass"):
    response = await client.post(f"{API}/auth/signup", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
