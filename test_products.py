"""
Тесты витрины: сетка товаров, фильтры, слайдер, детальная страница.
"""


def names(response):
    return [card["name"] for card in response.json()["data"]]


def test_grid_defaults_to_sneakers_newest_first(client, catalog_data):
    response = client.get("/api/v1/products")

    assert response.status_code == 200
    body = response.json()
    assert names(response) == ["Ultraboost", "Court Classic", "Air Max 90"]
    assert body["total"] == 3
    assert body["nextPage"] is None


def test_grid_pagination_next_page(client, catalog_data):
    first = client.get("/api/v1/products", params={"limit": 2})
    second = client.get("/api/v1/products", params={"limit": 2, "page": 2})

    assert first.json()["nextPage"] == 2
    assert names(second) == ["Air Max 90"]
    assert second.json()["nextPage"] is None


def test_grid_filters(client, catalog_data):
    assert names(client.get("/api/v1/products?category=Boots")) == ["Trail Boot"]
    assert names(client.get("/api/v1/products?size=41")) == ["Ultraboost", "Air Max 90"]
    assert names(client.get("/api/v1/products?sex=Women")) == ["Ultraboost"]
    assert names(client.get("/api/v1/products?brand=Nike")) == ["Court Classic", "Air Max 90"]
    assert names(client.get("/api/v1/products?minPrice=100&maxPrice=150")) == ["Air Max 90"]
    assert names(client.get("/api/v1/products?search=air")) == ["Air Max 90"]
    assert names(client.get("/api/v1/products?category=Sneakers,Boots&brand=Adidas")) == [
        "Trail Boot",
        "Ultraboost",
    ]


def test_grid_sorting(client, catalog_data):
    response = client.get("/api/v1/products?sort=price&order=asc")
    assert names(response) == ["Court Classic", "Air Max 90", "Ultraboost"]

    response = client.get("/api/v1/products?sort=name&order=desc")
    assert names(response) == ["Ultraboost", "Court Classic", "Air Max 90"]


def test_product_card_fields(client, catalog_data):
    cards = {card["name"]: card for card in client.get("/api/v1/products").json()["data"]}

    ultraboost = cards["Ultraboost"]
    assert ultraboost["priceLabel"] == "₹180"
    assert ultraboost["discountPrice"] == 220
    assert ultraboost["discountPriceLabel"] == "₹220"
    assert ultraboost["image"] is None
    assert ultraboost["brand"] == "Adidas"

    air_max = cards["Air Max 90"]
    assert air_max["image"] == "/static/products/aa/air-max-1.jpg"
    assert air_max["isNew"] is True
    assert air_max["href"] == f"/product/{catalog_data['products']['air_max']}"


def test_price_range_ignores_sex_and_price(client, catalog_data):
    response = client.get("/api/v1/products/prices?sex=Women&minPrice=150")

    assert response.json() == {"minPrice": 90, "maxPrice": 180}


def test_price_range_empty_catalog(client):
    assert client.get("/api/v1/products/prices").json() == {"minPrice": 0, "maxPrice": 0}


def test_slider_products(client, catalog_data):
    response = client.get("/api/v1/products/slider")

    assert [card["name"] for card in response.json()] == ["Ultraboost", "Air Max 90"]


def test_product_detail(client, catalog_data):
    product_id = catalog_data["products"]["air_max"]
    response = client.get(f"/api/v1/products/{product_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == product_id
    assert body["sizes"] == ["40", "41", "42"]
    assert body["images"] == [
        "/static/products/aa/air-max-1.jpg",
        "/static/products/aa/air-max-2.jpg",
    ]
    assert body["category"] == {"id": catalog_data["categories"]["sneakers"], "name": "Sneakers"}
    assert body["brand"]["name"] == "Nike"
    assert body["is_new"] is True
    assert body["showInSlider"] is True
    assert body["sex"] == "Men"


def test_product_detail_not_found(client):
    response = client.get("/api/v1/products/0123456789abcdef0123456789abcdef")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product not found"}


def test_related_products_skip_unavailable(client, catalog_data):
    product_id = catalog_data["products"]["air_max"]
    response = client.get(f"/api/v1/products/{product_id}/related")

    assert [card["name"] for card in response.json()] == ["Ultraboost"]


def test_related_products_unknown_product(client):
    response = client.get("/api/v1/products/missing/related")

    assert response.status_code == 200
    assert response.json() == []


def test_public_brand_and_category_lists(client, catalog_data):
    assert [b["name"] for b in client.get("/api/v1/brands").json()] == ["Adidas", "Nike"]
    categories = client.get("/api/v1/categories").json()
    assert [c["name"] for c in categories] == ["Boots", "Sneakers"]
    assert categories[1]["description"] == "Everyday sneakers"


# ==================== ПАНЕЛЬ ФИЛЬТРОВ ====================


def test_filter_view(client, catalog_data):
    response = client.get("/api/v1/filters?sex=Men&brand=Nike")

    assert response.status_code == 200
    view = response.json()
    assert view["title"] == "Shop Men"
    assert view["query"] == "sex=Men&brand=Nike"
    assert view["hasFilters"] is True
    assert view["priceBounds"] == {"minPrice": 90, "maxPrice": 120}
    assert [(o["value"], o["checked"]) for o in view["brands"]] == [("Adidas", False), ("Nike", True)]
    assert [o["value"] for o in view["sizes"]][:2] == ["36", "37"]
    assert [badge["label"] for badge in view["badges"]] == ["Men", "Nike"]


def test_filter_view_home_title(client, catalog_data):
    view = client.get("/api/v1/filters?sex=Women&home=true").json()

    assert view["title"] == "Collection"


def test_toggle_filter(client, catalog_data):
    view = client.get("/api/v1/filters/toggle?key=size&value=40&size=41").json()

    assert view["filters"]["size"] == ["41", "40"]
    assert view["query"] == "size=41%2C40"


def test_toggle_unknown_filter(client):
    response = client.get("/api/v1/filters/toggle?key=color&value=red")

    assert response.status_code == 400


def test_remove_filter_badge(client, catalog_data):
    view = client.get("/api/v1/filters/remove?key=brand&value=Nike&brand=Nike,Adidas").json()

    assert view["filters"]["brand"] == ["Adidas"]


def test_search_treats_like_wildcards_literally(client, catalog_data):
    assert client.get("/api/v1/products", params={"search": "%"}).json()["total"] == 0
    assert client.get("/api/v1/products", params={"search": "_"}).json()["total"] == 0
    assert names(client.get("/api/v1/products", params={"search": "Max 9"})) == ["Air Max 90"]


def test_toggle_rejects_value_with_comma(client, catalog_data):
    response = client.get("/api/v1/filters/toggle", params={"key": "category", "value": "Shoes, Boots"})

    assert response.status_code == 400
