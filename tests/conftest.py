"""Shared fixtures: payloads shaped like the remote dashboard JSON."""

import pytest

from core.schemas import Dataset


def month_record(plan_income, fact_income, plan_partners=10, fact_partners=8):
    return {
        "plan": {"income": plan_income, "activePartners": plan_partners},
        "fact": {"income": fact_income, "activePartners": fact_partners},
    }


@pytest.fixture
def payload():
    totals = [month_record(100000 + m * 1000, 90000 + m * 1000, 50 + m, 40 + m) for m in range(12)]
    alice_months = [month_record(1000 * (m + 1), 900 * (m + 1)) for m in range(12)]
    alice_months[3] = None
    bob_months = [month_record(2500, 2400, 3, 2) for _ in range(12)]
    return {
        "success": True,
        "data": {
            "total": totals,
            "table": [
                {"id": 1, "adminId": 11, "adminName": "Alice", "months": alice_months, "year": 2024},
                {"id": 2, "adminId": 12, "adminName": "Bob", "months": bob_months, "year": 2024},
            ],
        },
    }


@pytest.fixture
def dataset(payload):
    return Dataset.model_validate(payload["data"])


class FakeResponse:
    def __init__(self, status_code=200, body=None, json_error=None):
        self.status_code = status_code
        self._body = body
        self._json_error = json_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._body


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; returns a list recording every call made."""
    calls = []

    def install(response=None, error=None):
        def _get(url, **kwargs):
            calls.append((url, kwargs))
            if error is not None:
                raise error
            return response

        monkeypatch.setattr("requests.get", _get)
        return calls

    return install


@pytest.fixture
def make_response():
    return FakeResponse
