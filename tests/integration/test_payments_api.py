def test_create_payment_intent_success(client, fake_stripe):
    r = client.post(
        "/api/payments/create-payment-intent",
        json={"amount": 12.5, "currency": "USD", "readerId": "tmr_online"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    pi = body["paymentIntent"]
    assert pi["amount"] == 1250
    assert pi["currency"] == "usd"
    assert pi["capture_method"] == "manual"
    assert pi["metadata"] == {"readerId": "tmr_online"}


def test_create_payment_intent_non_numeric_amount_is_400(client, fake_stripe):
    r = client.post(
        "/api/payments/create-payment-intent",
        json={"amount": "abc", "readerId": "tmr_online"},
    )
    assert r.status_code == 400
    assert r.json()["status"] == "error"
    assert fake_stripe.calls == []


def test_create_payment_intent_missing_amount_is_400(client, fake_stripe):
    r = client.post("/api/payments/create-payment-intent", json={"readerId": "tmr_online"})
    assert r.status_code == 400
    assert r.json() == {"status": "error", "message": "Montant valide requis"}


def test_create_payment_intent_unknown_reader_is_404(client, fake_stripe):
    r = client.post(
        "/api/payments/create-payment-intent",
        json={"amount": 5, "readerId": "tmr_unknown"},
    )
    assert r.status_code == 404
    assert r.json()["status"] == "error"
    assert "tmr_unknown" in r.json()["message"]


def test_create_payment_intent_offline_reader_is_400(client, fake_stripe):
    r = client.post(
        "/api/payments/create-payment-intent",
        json={"amount": 5, "readerId": "tmr_offline"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Le lecteur n'est pas en ligne"


def test_capture_and_cancel(client, fake_stripe):
    pi = fake_stripe.create_payment_intent(amount=100, currency="usd")
    r = client.post(f"/api/payments/capture-payment/{pi['id']}")
    assert r.status_code == 200
    assert r.json()["paymentIntent"]["status"] == "succeeded"

    pi2 = fake_stripe.create_payment_intent(amount=100, currency="usd")
    r2 = client.post(f"/api/payments/cancel-payment/{pi2['id']}")
    assert r2.status_code == 200
    assert r2.json()["paymentIntent"]["status"] == "canceled"


def test_capture_unknown_payment_intent_is_404(client, fake_stripe):
    r = client.post("/api/payments/capture-payment/pi_missing")
    assert r.status_code == 404
    assert r.json()["status"] == "error"


def test_process_payment(client, fake_stripe):
    r = client.post("/api/payments/process-payment/tmr_online", json={"payment_intent": "pi_42"})
    assert r.status_code == 200
    reader = r.json()["reader"]
    assert reader["action"]["process_payment_intent"]["payment_intent"] == "pi_42"


def test_process_payment_without_body_is_400(client, fake_stripe):
    r = client.post("/api/payments/process-payment/tmr_online")
    assert r.status_code == 400
    assert fake_stripe.calls == []


def test_process_payment_offline_reader_is_400(client, fake_stripe):
    r = client.post("/api/payments/process-payment/tmr_offline", json={"payment_intent": "pi_42"})
    assert r.status_code == 400
    assert fake_stripe.called("process_payment_intent") == []


def test_simulate_payment(client, fake_stripe):
    r = client.post("/api/payments/simulate-payment/tmr_online")
    assert r.status_code == 200
    assert r.json()["reader"]["action"]["status"] == "succeeded"


def test_simulate_payment_refused_in_live_mode(client, fake_stripe, monkeypatch):
    from terminal_backend.infra import stripe_client
    monkeypatch.setattr(stripe_client, "STRIPE_SECRET_KEY", "sk_live_123")
    r = client.post("/api/payments/simulate-payment/tmr_online")
    assert r.status_code == 400
    assert fake_stripe.calls == []


def test_create_and_process_payment(client, fake_stripe):
    r = client.post(
        "/api/payments/create-and-process-payment/tmr_online",
        json={"amount": 9.99, "currency": "eur"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["paymentIntent"]["amount"] == 999
    assert body["reader"]["action"]["process_payment_intent"]["payment_intent"] == body["paymentIntent"]["id"]


def test_stripe_key_missing_is_500(client, monkeypatch):
    from terminal_backend.infra import stripe_client
    # Adaptateur réel: la clé est vérifiée avant tout appel réseau
    monkeypatch.setattr(stripe_client, "STRIPE_SECRET_KEY", "")
    r = client.post(
        "/api/payments/create-payment-intent",
        json={"amount": 5, "readerId": "tmr_online"},
    )
    assert r.status_code == 500
    assert r.json() == {"status": "error", "message": "STRIPE_SECRET_KEY manquant"}


def test_create_payment_intent_non_finite_amount_is_400(client, fake_stripe):
    for raw in ("NaN", "Infinity"):
        r = client.post(
            "/api/payments/create-payment-intent",
            content='{"amount": %s, "readerId": "tmr_online"}' % raw,
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 400, raw
        assert r.json() == {"status": "error", "message": "Montant valide requis"}
    assert fake_stripe.called("create_payment_intent") == []


def test_process_payment_unknown_reader_is_404(client, fake_stripe):
    r = client.post("/api/payments/process-payment/tmr_ghost", json={"payment_intent": "pi_42"})
    assert r.status_code == 404
    assert r.json()["status"] == "error"
    assert fake_stripe.called("process_payment_intent") == []


def test_create_and_process_payment_offline_reader_is_400(client, fake_stripe):
    r = client.post("/api/payments/create-and-process-payment/tmr_offline", json={"amount": 5})
    assert r.status_code == 400
    assert r.json()["message"] == "Le lecteur n'est pas en ligne"
    assert fake_stripe.called("create_payment_intent") == []


def test_create_and_process_payment_simulated_skips_online_check(client, fake_stripe):
    r = client.post(
        "/api/payments/create-and-process-payment/tmr_offline",
        json={"amount": 5, "simulated": True},
    )
    assert r.status_code == 200
    assert r.json()["reader"]["action"]["process_payment_intent"]["payment_intent"] == r.json()["paymentIntent"]["id"]
