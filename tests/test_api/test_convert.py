def test_convert_currency_success(client):
    request_data = {
        "from_currency": "USD",
        "to_currency": "EUR",
        "amount": 100.00
    }

    response = client.post("/api/v1/convert", json=request_data)

    assert response.status_code == 200
    data = response.json()

    assert data["from_currency"] == "USD"
    assert data["to_currency"] == "EUR"
    assert data["amount"] == 100.0
    assert data["converted_amount"] == 92.0
    assert data["exchange_rate"] == 0.92
    assert data["rate_display"] == "0.920000"
    assert data["source"] == "static"
    assert "timestamp" in data


def test_convert_lowercase_codes(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "usd",
        "to_currency": "gbp",
        "amount": 10
    })

    assert response.status_code == 200
    assert response.json()["to_currency"] == "GBP"
    assert response.json()["converted_amount"] == 7.9


def test_convert_rounds_to_two_places(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "EUR",
        "to_currency": "JPY",
        "amount": 1
    })

    assert response.status_code == 200
    assert response.json()["converted_amount"] == round(149.50 / 0.92, 2)


def test_convert_same_currency(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "CHF",
        "to_currency": "CHF",
        "amount": 12.34
    })

    assert response.status_code == 200
    data = response.json()
    assert data["converted_amount"] == 12.34
    assert data["exchange_rate"] == 1.0
    assert data["rate_display"] == "1.000000"


def test_convert_unknown_currency(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "USD",
        "to_currency": "XYZ",
        "amount": 100
    })

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "unknown_currency"
    assert "XYZ" in data["message"]
    assert data["path"] == "/api/v1/convert"


def test_convert_non_letter_code(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "US1",
        "to_currency": "EUR",
        "amount": 100
    })

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_currency_code"


def test_convert_invalid_currency_length(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "USDT",
        "to_currency": "EUR",
        "amount": 100
    })

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_convert_negative_amount(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "USD",
        "to_currency": "EUR",
        "amount": -100
    })

    assert response.status_code == 422


def test_convert_missing_fields(client):
    response = client.post("/api/v1/convert", json={"from_currency": "USD"})

    assert response.status_code == 422
    assert response.json()["details"]


def test_convert_providers_unavailable(unavailable_client):
    response = unavailable_client.post("/api/v1/convert", json={
        "from_currency": "USD",
        "to_currency": "EUR",
        "amount": 100
    })

    assert response.status_code == 503
    data = response.json()
    assert data["error"] == "providers_unavailable"
    assert data["message"] == "Exchange rate service unavailable"


def test_convert_get_endpoint(client):
    response = client.get("/api/v1/convert/USD/EUR/100")

    assert response.status_code == 200
    assert response.json()["converted_amount"] == 92.0


def test_convert_get_negative_amount(client):
    response = client.get("/api/v1/convert/USD/EUR/-5")

    assert response.status_code == 422


def test_batch_convert(client):
    response = client.post("/api/v1/convert/batch", json={
        "from_currency": "USD",
        "amount": 250,
        "to_currencies": ["eur", "GBP", "XYZ", "E1"]
    })

    assert response.status_code == 200
    data = response.json()
    assert data["from_currency"] == "USD"

    results = {item["to_currency"]: item for item in data["results"]}
    assert results["EUR"]["converted_amount"] == 230.0
    assert results["GBP"]["converted_amount"] == 197.5
    assert results["XYZ"]["error_type"] == "UnknownCurrencyError"
    assert results["XYZ"]["converted_amount"] is None
    assert results["E1"]["error_type"] == "InvalidCurrencyCodeError"


def test_batch_convert_requires_targets(client):
    response = client.post("/api/v1/convert/batch", json={
        "from_currency": "USD",
        "amount": 1,
        "to_currencies": []
    })

    assert response.status_code == 422


def test_batch_convert_providers_unavailable(unavailable_client):
    response = unavailable_client.post("/api/v1/convert/batch", json={
        "from_currency": "USD",
        "amount": 1,
        "to_currencies": ["EUR"]
    })

    assert response.status_code == 503


def test_convert_result_overflow(client):
    response = client.post("/api/v1/convert", json={
        "from_currency": "USD",
        "to_currency": "JPY",
        "amount": 1e308
    })

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "invalid_amount"
    assert "JPY" in data["message"]


def test_batch_convert_result_overflow(client):
    response = client.post("/api/v1/convert/batch", json={
        "from_currency": "USD",
        "amount": 1e308,
        "to_currencies": ["EUR", "JPY"]
    })

    assert response.status_code == 200
    results = {item["to_currency"]: item for item in response.json()["results"]}
    assert results["EUR"]["error"] is None
    assert results["JPY"]["converted_amount"] is None
    assert results["JPY"]["error_type"] == "InvalidAmountError"
