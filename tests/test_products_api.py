"""Catalog routes: public reads, admin-only writes with image upload"""

from conftest import bearer


def test_list_seeded_products(client):
    res = client.get("/api/products")
    assert res.status_code == 200
    products = res.json()
    assert [p["name"] for p in products] == ["Laptop Pro", "Wireless Mouse", "Mechanical Keyboard"]
    assert products[0] == {
        "id": 1,
        "name": "Laptop Pro",
        "price": 1200.0,
        "description": "A high-performance laptop for professionals.",
        "imageUrl": "/uploads/placeholder.png",
    }


def test_get_product(client):
    assert client.get("/api/products/2").json()["name"] == "Wireless Mouse"
    res = client.get("/api/products/99")
    assert res.status_code == 404
    assert res.json()["error"] == "NotFound"


def test_create_product_requires_admin(client, user_token):
    data = {"name": "Monitor", "price": "199.99"}
    assert client.post("/api/products", data=data).status_code == 401
    assert client.post("/api/products", data=data, headers=bearer(user_token)).status_code == 403
    assert len(client.get("/api/products").json()) == 3


def test_admin_creates_product_with_image(client, admin_token, settings):
    res = client.post(
        "/api/products",
        data={"name": "Monitor", "price": "199.99", "description": "27 inch"},
        files={"image": ("monitor.png", b"\x89PNG fake", "image/png")},
        headers=bearer(admin_token),
    )
    assert res.status_code == 201, res.text
    product = res.json()
    assert product["id"] == 4
    assert product["price"] == 199.99
    assert product["imageUrl"].startswith("/uploads/image-")
    assert product["imageUrl"].endswith(".png")

    stored = settings.uploads_dir / product["imageUrl"].rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG fake"
    assert client.get(product["imageUrl"]).content == b"\x89PNG fake"


def test_create_product_validation(client, admin_token):
    res = client.post("/api/products", data={"name": "No price"}, headers=bearer(admin_token))
    assert res.status_code == 400
    assert res.json()["detail"] == "Product name and price are required."

    res = client.post(
        "/api/products", data={"name": "Bad", "price": "free"}, headers=bearer(admin_token)
    )
    assert res.status_code == 400

    res = client.post(
        "/api/products", data={"name": "Negative", "price": "-1"}, headers=bearer(admin_token)
    )
    assert res.status_code == 400


def test_update_product_partial_and_replaces_image(client, admin_token, settings):
    created = client.post(
        "/api/products",
        data={"name": "Lamp", "price": "20"},
        files={"image": ("lamp.jpg", b"old", "image/jpeg")},
        headers=bearer(admin_token),
    ).json()
    old_file = settings.uploads_dir / created["imageUrl"].rsplit("/", 1)[1]
    assert old_file.exists()

    res = client.put(
        f"/api/products/{created['id']}",
        data={"price": "22.50"},
        files={"image": ("lamp2.jpg", b"new", "image/jpeg")},
        headers=bearer(admin_token),
    )
    assert res.status_code == 200, res.text
    updated = res.json()
    assert updated["name"] == "Lamp"
    assert updated["price"] == 22.5
    assert updated["imageUrl"] != created["imageUrl"]
    assert not old_file.exists()


def test_update_unknown_product_is_404(client, admin_token):
    res = client.put("/api/products/99", data={"name": "x"}, headers=bearer(admin_token))
    assert res.status_code == 404


def test_delete_product(client, admin_token, user_token):
    assert client.delete("/api/products/1", headers=bearer(user_token)).status_code == 403
    assert client.delete("/api/products/1", headers=bearer(admin_token)).status_code == 204
    assert client.get("/api/products/1").status_code == 404
    assert client.delete("/api/products/1", headers=bearer(admin_token)).status_code == 404


def test_price_update_changes_checkout_total(client, admin_token, user_token, gateway):
    client.put("/api/products/2", data={"price": "30"}, headers=bearer(admin_token))
    res = client.post(
        "/api/create-payment-intent",
        json={"cart": [{"id": 2, "price": 25}]},
        headers=bearer(user_token),
    )
    assert res.json()["amount"] == 3000
