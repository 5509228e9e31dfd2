from models.category import product_categories


def test_create_product_returns_categories_and_defaults(make_category, make_product):
    vintage = make_category("Vintage", 10)

    product = make_product("Jacket", category_ids=[vintage["id"]])

    assert product["isAvailable"] is True
    assert product["customPrice"] is None
    assert product["price"] == 10
    assert [(c["name"], c["defaultPrice"]) for c in product["categories"]] == [("Vintage", 10)]


def test_create_product_with_unknown_category_is_404(admin_client, db):
    r = admin_client.post("/api/products", json={"name": "Ghost", "categoryIds": [4242]})
    assert r.status_code == 404
    assert r.json()["message"] == "Category not found"

    listing = admin_client.get("/api/products").json()
    assert listing["data"] == []


def test_effective_price_rule(make_category, make_product):
    cheap = make_category("Cheap", 5)
    pricey = make_category("Pricey", 30)

    assert make_product("Custom", category_ids=[cheap["id"]], customPrice=42.5)["price"] == 42.5
    assert make_product("Cheapest wins", category_ids=[pricey["id"], cheap["id"]])["price"] == 5
    assert make_product("No categories")["price"] == 0


def test_filter_by_category_scenario(client, make_category, make_product):
    vintage = make_category("Vintage", 10)
    make_category("Denim", 8)
    make_product("Jacket", category_ids=[vintage["id"]])
    make_product("Plain")

    r = client.get("/api/products", params={"categoryId": vintage["id"]})

    assert r.status_code == 200
    data = r.json()["data"]
    assert [p["name"] for p in data] == ["Jacket"]
    assert [{"name": c["name"], "defaultPrice": c["defaultPrice"]} for c in data[0]["categories"]] == [
        {"name": "Vintage", "defaultPrice": 10}
    ]


def test_multi_category_filter_returns_each_product_once_with_all_categories(client, make_category, make_product):
    a = make_category("A", 1)
    b = make_category("B", 2)
    c = make_category("C", 3)
    make_product("Both", category_ids=[a["id"], b["id"], c["id"]])
    make_product("Only C", category_ids=[c["id"]])
    make_product("Uncategorised")

    r = client.get("/api/products", params={"categoryId": f"{a['id']},{b['id']}"})

    data = r.json()["data"]
    assert [p["name"] for p in data] == ["Both"]
    assert sorted(cat["name"] for cat in data[0]["categories"]) == ["A", "B", "C"]


def test_repeated_category_query_params(client, make_category, make_product):
    a = make_category("A")
    b = make_category("B")
    make_product("In A", category_ids=[a["id"]])
    make_product("In B", category_ids=[b["id"]])

    r = client.get(f"/api/products?categoryId={a['id']}&categoryId={b['id']}")

    assert sorted(p["name"] for p in r.json()["data"]) == ["In A", "In B"]


def test_invalid_category_param_is_400(client):
    r = client.get("/api/products", params={"categoryId": "abc"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid request"
    assert body["errors"][0]["path"] == "query.categoryId"


def test_out_of_range_ids_are_rejected_or_not_found(client):
    huge = 10**20

    r = client.get("/api/products", params={"categoryId": str(huge)})
    assert r.status_code == 400
    assert r.json()["errors"][0]["path"] == "query.categoryId"

    r = client.get("/api/products", params={"page": 10**19})
    assert r.status_code == 400
    assert r.json()["errors"][0]["path"] == "query.page"

    assert client.get(f"/api/products/{huge}").status_code == 400
    assert client.get(f"/api/categories/{huge}").status_code == 400
    assert client.get("/api/products/2147483647").status_code == 404


def test_availability_filter(client, make_product):
    make_product("On sale")
    make_product("Sold out", isAvailable=False)

    available = client.get("/api/products", params={"isAvailable": "true"}).json()["data"]
    unavailable = client.get("/api/products", params={"isAvailable": "false"}).json()["data"]

    assert [p["name"] for p in available] == ["On sale"]
    assert [p["name"] for p in unavailable] == ["Sold out"]


def test_pagination_over_25_products(client, make_product):
    for i in range(25):
        make_product(f"P{i:02d}")

    pages = [client.get("/api/products", params={"page": n, "limit": 12}).json() for n in (1, 2, 3)]

    assert [len(p["data"]) for p in pages] == [12, 12, 1]
    assert pages[0]["nextPage"] == 2
    assert pages[1]["nextPage"] == 3
    assert pages[2].get("nextPage") is None
    assert pages[2]["lastPage"] is True
    # newest first, no overlap between pages
    names = [p["name"] for page in pages for p in page["data"]]
    assert names == [f"P{i:02d}" for i in reversed(range(25))]


def test_limit_is_capped(client, make_product):
    for i in range(3):
        make_product(f"P{i}")
    r = client.get("/api/products", params={"limit": 5000})
    assert r.status_code == 200
    assert len(r.json()["data"]) == 3


def test_get_single_product(client, make_product):
    product = make_product("Single")
    assert client.get(f"/api/products/{product['id']}").json()["name"] == "Single"
    assert client.get("/api/products/9999").status_code == 404


def test_patch_without_categories_keeps_associations(admin_client, make_category, make_product):
    vintage = make_category("Vintage", 10)
    product = make_product("Jacket", category_ids=[vintage["id"]])

    r = admin_client.patch(f"/api/products/{product['id']}", json={"customPrice": 99, "isAvailable": False})

    assert r.status_code == 200
    body = r.json()
    assert body["price"] == 99
    assert body["isAvailable"] is False
    assert [c["id"] for c in body["categories"]] == [vintage["id"]]


def test_patch_clearing_custom_price_falls_back_to_categories(admin_client, make_category, make_product):
    vintage = make_category("Vintage", 10)
    product = make_product("Jacket", category_ids=[vintage["id"]], customPrice=50)

    body = admin_client.patch(f"/api/products/{product['id']}", json={"customPrice": None}).json()

    assert body["customPrice"] is None
    assert body["price"] == 10


def test_patch_with_categories_replaces_set(admin_client, make_category, make_product):
    a = make_category("A", 3)
    b = make_category("B", 7)
    product = make_product("Thing", category_ids=[a["id"]])

    body = admin_client.patch(f"/api/products/{product['id']}", json={"categoryIds": [b["id"]]}).json()

    assert [c["name"] for c in body["categories"]] == ["B"]
    assert body["price"] == 7


def test_replacing_with_empty_list_only_touches_target(admin_client, make_category, make_product, db):
    cat = make_category("Shared", 4)
    target = make_product("Target", category_ids=[cat["id"]])
    other = make_product("Other", category_ids=[cat["id"]])

    body = admin_client.patch(f"/api/products/{target['id']}", json={"categoryIds": []}).json()

    assert body["categories"] == []
    rows = db.execute(product_categories.select()).all()
    assert [(r.product_id, r.category_id) for r in rows] == [(other["id"], cat["id"])]


def test_patch_null_name_is_ignored(admin_client, make_product):
    product = make_product("Keep me")
    body = admin_client.patch(f"/api/products/{product['id']}", json={"name": None, "description": "new"}).json()
    assert body["name"] == "Keep me"
    assert body["description"] == "new"


def test_patch_missing_product_is_404(admin_client):
    assert admin_client.patch("/api/products/404", json={"isAvailable": False}).status_code == 404


def test_delete_product_cascades_junction(admin_client, make_category, make_product, db):
    cat = make_category("Vintage", 10)
    product = make_product("Jacket", category_ids=[cat["id"]])

    r = admin_client.delete(f"/api/products/{product['id']}")

    assert r.status_code == 200
    assert db.execute(product_categories.select()).all() == []
    assert admin_client.get(f"/api/categories/{cat['id']}").status_code == 200


def test_delete_missing_product_is_404(admin_client):
    r = admin_client.delete("/api/products/12345")
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found"}


def test_mutations_require_admin(client, customer_client):
    body = {"name": "Nope"}
    assert client.post("/api/products", json=body).status_code == 401
    assert customer_client.post("/api/products", json=body).status_code == 403
    assert client.delete("/api/products/1").status_code == 401
    assert customer_client.patch("/api/products/1", json={"isAvailable": False}).status_code == 403


def test_validation_errors_are_itemised(admin_client):
    r = admin_client.post("/api/products", json={"customPrice": -5})

    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid request"
    paths = {e["path"] for e in body["errors"]}
    assert "body.name" in paths
    assert "body.customPrice" in paths


def test_listing_cache_is_invalidated_by_mutations(client, admin_client, make_product):
    product = make_product("Before")
    assert [p["name"] for p in client.get("/api/products").json()["data"]] == ["Before"]

    admin_client.patch(f"/api/products/{product['id']}", json={"name": "After"})

    assert [p["name"] for p in client.get("/api/products").json()["data"]] == ["After"]
