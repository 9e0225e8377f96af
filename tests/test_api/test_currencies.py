from fxconvert.services.rate_source import STATIC_USD_RATES


def test_list_currencies(client):
    response = client.get("/api/v1/currencies")

    assert response.status_code == 200
    data = response.json()
    assert data["base_currency"] == "USD"
    assert data["currencies"] == sorted(STATIC_USD_RATES)
    assert data["count"] == len(STATIC_USD_RATES)


def test_list_currencies_other_base(client):
    response = client.get("/api/v1/currencies", params={"base": "eur"})

    assert response.status_code == 200
    assert response.json()["base_currency"] == "EUR"


def test_list_currencies_unavailable(unavailable_client):
    response = unavailable_client.get("/api/v1/currencies")

    assert response.status_code == 503
    assert response.json()["error"] == "providers_unavailable"


def test_popular_currencies(client):
    response = client.get("/api/v1/currencies/popular")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 15
    assert data[0] == {"code": "USD", "name": "US Dollar"}


def test_validate_known_currency(client):
    response = client.get("/api/v1/currencies/jpy/validate")

    assert response.status_code == 200
    assert response.json() == {"code": "JPY", "valid": True}


def test_validate_unknown_currency(client):
    response = client.get("/api/v1/currencies/KRW/validate")

    assert response.status_code == 200
    assert response.json()["valid"] is False


def test_validate_malformed_currency(client):
    response = client.get("/api/v1/currencies/dollars/validate")

    assert response.status_code == 200
    assert response.json()["valid"] is False
