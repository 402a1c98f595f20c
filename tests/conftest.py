import os

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
import stripe
from typing import Any, Dict, Generator, List, Tuple
from fastapi.testclient import TestClient

from terminal_backend.app import app as fastapi_app
from terminal_backend.infra import stripe_client

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Clés factices: aucun appel réel n'est possible, chaque test mocke stripe_client
@pytest.fixture(autouse=True)
def _stripe_test_keys(monkeypatch):
    monkeypatch.setattr(stripe_client, "STRIPE_SECRET_KEY", "sk_test_dummy", raising=True)
    monkeypatch.setattr(stripe_client, "STRIPE_WEBHOOK_SECRET", "whsec_test_secret", raising=True)


def _missing(kind: str, object_id: str) -> stripe.InvalidRequestError:
    return stripe.InvalidRequestError(
        f"No such {kind}: '{object_id}'",
        "id",
        code="resource_missing",
        http_status=404,
    )


class FakeStripe:
    """Double en mémoire des fonctions de terminal_backend.infra.stripe_client."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []
        self.readers: Dict[str, Dict[str, Any]] = {
            "tmr_online": {"id": "tmr_online", "object": "terminal.reader", "status": "online", "label": "Caisse 1", "action": None},
            "tmr_offline": {"id": "tmr_offline", "object": "terminal.reader", "status": "offline", "label": "Caisse 2", "action": None},
        }
        self.payment_intents: Dict[str, Dict[str, Any]] = {}
        self._seq = 0

    # --- lecteurs ---
    def retrieve_reader(self, reader_id):
        self.calls.append(("retrieve_reader", reader_id))
        if reader_id not in self.readers:
            raise _missing("terminal.reader", reader_id)
        return dict(self.readers[reader_id])

    def list_readers(self, **params):
        self.calls.append(("list_readers", params))
        readers = list(self.readers.values())
        if params.get("status"):
            readers = [r for r in readers if r["status"] == params["status"]]
        return [dict(r) for r in readers]

    def create_reader(self, **params):
        self.calls.append(("create_reader", params))
        reader = {"id": "tmr_new", "object": "terminal.reader", "status": "online", "action": None}
        reader.update(params)
        self.readers[reader["id"]] = reader
        return dict(reader)

    def process_payment_intent(self, reader_id, payment_intent_id):
        self.calls.append(("process_payment_intent", (reader_id, payment_intent_id)))
        reader = dict(self.retrieve_reader(reader_id))
        reader["action"] = {
            "type": "process_payment_intent",
            "status": "in_progress",
            "process_payment_intent": {"payment_intent": payment_intent_id},
        }
        return reader

    def present_payment_method(self, reader_id):
        self.calls.append(("present_payment_method", reader_id))
        reader = dict(self.retrieve_reader(reader_id))
        reader["action"] = {"type": "process_payment_intent", "status": "succeeded"}
        return reader

    # --- payment intents ---
    def create_payment_intent(self, **params):
        self.calls.append(("create_payment_intent", params))
        self._seq += 1
        pi = {"id": f"pi_test_{self._seq}", "object": "payment_intent", "status": "requires_payment_method", "created": 1700000000}
        pi.update(params)
        self.payment_intents[pi["id"]] = pi
        return dict(pi)

    def _update_status(self, payment_intent_id, status):
        if payment_intent_id not in self.payment_intents:
            raise _missing("payment_intent", payment_intent_id)
        self.payment_intents[payment_intent_id]["status"] = status
        return dict(self.payment_intents[payment_intent_id])

    def capture_payment_intent(self, payment_intent_id):
        self.calls.append(("capture_payment_intent", payment_intent_id))
        return self._update_status(payment_intent_id, "succeeded")

    def cancel_payment_intent(self, payment_intent_id):
        self.calls.append(("cancel_payment_intent", payment_intent_id))
        return self._update_status(payment_intent_id, "canceled")

    def retrieve_payment_intent(self, payment_intent_id):
        self.calls.append(("retrieve_payment_intent", payment_intent_id))
        if payment_intent_id not in self.payment_intents:
            raise _missing("payment_intent", payment_intent_id)
        return dict(self.payment_intents[payment_intent_id])

    def called(self, name: str) -> List[Any]:
        return [args for n, args in self.calls if n == name]


_PATCHED = (
    "retrieve_reader",
    "list_readers",
    "create_reader",
    "process_payment_intent",
    "present_payment_method",
    "create_payment_intent",
    "capture_payment_intent",
    "cancel_payment_intent",
    "retrieve_payment_intent",
)

@pytest.fixture
def fake_stripe(monkeypatch) -> FakeStripe:
    fake = FakeStripe()
    for name in _PATCHED:
        monkeypatch.setattr(stripe_client, name, getattr(fake, name), raising=True)
    return fake
