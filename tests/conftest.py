import asyncio
from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.db.blob_store import InMemoryBlobStore
from app.db.transaction_store import TransactionStore
from app.main import create_app
from app.utils.advisor import FinancialAdvisor


class FakeModels:
    """Stands in for ``client.aio.models`` of the Gemini SDK."""

    def __init__(self, text="- Spend less on takeaway", error=None, gate=None):
        self.text = text
        self.error = error
        self.gate = gate
        self.calls = []

    async def generate_content(self, model, contents):
        self.calls.append({"model": model, "contents": contents})
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def make_client(models: FakeModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


@pytest.fixture
def blob_data():
    return {}


@pytest.fixture
def store(blob_data):
    return TransactionStore(InMemoryBlobStore(blob_data))


@pytest.fixture
def populated_store(store):
    store.add("income", 3000.0, "Salary", date(2025, 11, 1))
    store.add("expense", 1200.0, "Rent", date(2025, 11, 2))
    store.add("expense", 85.5, "Groceries", date(2025, 11, 3))
    return store


@pytest.fixture
def fake_models():
    return FakeModels()


@pytest.fixture
def api(fake_models):
    advisor = FinancialAdvisor("test-key", client=make_client(fake_models))
    app = create_app(blob_store=InMemoryBlobStore(), advisor=advisor)
    with TestClient(app) as client:
        yield client


def run(coro):
    return asyncio.run(coro)
