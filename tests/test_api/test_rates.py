import pytest


def test_get_rate_info(client):
    response = client.get("/api/v1/rates/USD/EUR")

    assert response.status_code == 200
    data = response.json()
    assert data["from_currency"] == "USD"
    assert data["to_currency"] == "EUR"
    assert data["exchange_rate"] == 0.92
    assert data["reverse_rate"] == pytest.approx(1 / 0.92)
    assert data["rate_display"] == "0.920000"
    assert data["reverse_rate_display"] == f"{1 / 0.92:.6f}"


def test_get_rate_info_lowercase(client):
    response = client.get("/api/v1/rates/gbp/usd")

    assert response.status_code == 200
    assert response.json()["from_currency"] == "GBP"


def test_get_rate_info_unknown(client):
    response = client.get("/api/v1/rates/USD/XYZ")

    assert response.status_code == 404
    assert response.json()["error"] == "unknown_currency"


def test_get_rate_info_unavailable(unavailable_client):
    response = unavailable_client.get("/api/v1/rates/USD/EUR")

    assert response.status_code == 503


def test_get_rate_table(client):
    response = client.get("/api/v1/rates/USD")

    assert response.status_code == 200
    data = response.json()
    assert data["base_currency"] == "USD"
    assert data["rates"]["USD"] == 1.0
    assert data["rates"]["MXN"] == 17.15
    assert list(data["rates"]) == sorted(data["rates"])
    assert data["source"] == "static"


def test_get_rate_table_unknown_static_base(client):
    response = client.get("/api/v1/rates/ZAR")

    assert response.status_code == 404


def test_get_rate_table_bad_code(client):
    response = client.get("/api/v1/rates/U5D")

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_currency_code"
