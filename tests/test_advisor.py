import asyncio
from datetime import date

import pytest

from app.models.transaction import FinancialSummary
from app.utils.advisor import (
    ERROR_MESSAGE,
    NO_ADVICE_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    AdviceInFlightError,
    AdviceSession,
    FinancialAdvisor,
    build_prompt,
)
from app.utils.analyzer import FinanceAnalyzer
from conftest import FakeModels, make_client, run

summary = FinancialSummary(total_income=3000.0, total_expenses=1285.5, savings=1714.5)


def test_no_api_key_skips_network():
    models = FakeModels()
    advisor = FinancialAdvisor("", client=make_client(models))
    assert run(advisor.request_advice(summary, [])) == NOT_CONFIGURED_MESSAGE
    assert models.calls == []


def test_returns_reply_verbatim(populated_store):
    models = FakeModels(text="* Cook at home\n* Automate savings")
    advisor = FinancialAdvisor("key", model="gemini-test", client=make_client(models))

    advice = run(advisor.request_advice(summary, populated_store.all()))

    assert advice == "* Cook at home\n* Automate savings"
    assert models.calls[0]["model"] == "gemini-test"


@pytest.mark.parametrize("text", ["", None])
def test_empty_reply_falls_back(text):
    advisor = FinancialAdvisor("key", client=make_client(FakeModels(text=text)))
    assert run(advisor.request_advice(summary, [])) == NO_ADVICE_MESSAGE


@pytest.mark.parametrize("error", [ConnectionError("offline"), ValueError("bad payload"), KeyError("text")])
def test_collaborator_failure_returns_apology(error):
    advisor = FinancialAdvisor("key", client=make_client(FakeModels(error=error)))
    assert run(advisor.request_advice(summary, [])) == ERROR_MESSAGE


def test_prompt_contents(populated_store):
    prompt = build_prompt(summary, populated_store.all())

    assert "- Total Income: $3000.00" in prompt
    assert "- Total Expenses: $1285.50" in prompt
    assert "- Net Savings: $1714.50" in prompt
    assert "- 2025-11-03T12:00:00.000Z: EXPENSE $85.5 (Groceries)" in prompt
    assert "- 2025-11-01T12:00:00.000Z: INCOME $3000 (Salary)" in prompt


def test_prompt_uses_ten_most_recent(store):
    for day in range(1, 16):
        store.add("expense", float(day), f"item {day}", date(2025, 8, day))
    prompt = build_prompt(FinanceAnalyzer().summarize(store.all()), store.all())

    assert "(item 15)" in prompt
    assert "(item 6)" in prompt
    assert "(item 5)" not in prompt
    assert prompt.count(": EXPENSE $") == 10


def test_negative_savings_in_prompt():
    overspent = FinancialSummary(total_income=100.0, total_expenses=250.0, savings=-150.0)
    assert "- Net Savings: $-150.00" in build_prompt(overspent, [])


def test_session_keeps_latest_advice():
    session = AdviceSession(FinancialAdvisor("key", client=make_client(FakeModels(text="Save more"))))
    assert run(session.request(summary, [])) == "Save more"
    assert session.advice == "Save more"
    assert not session.in_flight

    session.dismiss()
    assert session.advice is None


def test_session_rejects_second_request_while_in_flight():
    async def scenario():
        gate = asyncio.Event()
        models = FakeModels(text="Done", gate=gate)
        session = AdviceSession(FinancialAdvisor("key", client=make_client(models)))

        first = asyncio.create_task(session.request(summary, []))
        await asyncio.sleep(0)
        assert session.in_flight
        with pytest.raises(AdviceInFlightError):
            await session.request(summary, [])

        gate.set()
        assert await first == "Done"
        assert len(models.calls) == 1
        return session

    session = run(scenario())
    assert not session.in_flight
    assert session.advice == "Done"


def test_mutation_during_request_discards_stale_advice(store):
    async def scenario():
        gate = asyncio.Event()
        session = AdviceSession(FinancialAdvisor("key", client=make_client(FakeModels(text="Old", gate=gate))))
        store.subscribe(session.invalidate)

        pending = asyncio.create_task(session.request(summary, store.all()))
        await asyncio.sleep(0)
        store.add("expense", 5.0, "Snack", date(2025, 1, 2))
        gate.set()
        assert await pending == "Old"
        return session

    session = run(scenario())
    assert session.advice is None


def test_session_releases_guard_after_failure():
    session = AdviceSession(FinancialAdvisor("key", client=make_client(FakeModels(error=RuntimeError("boom")))))
    assert run(session.request(summary, [])) == ERROR_MESSAGE
    assert not session.in_flight


def test_prompt_summary_ties_round_half_up():
    tied = FinancialSummary(total_income=10.125, total_expenses=0.375, savings=9.75)
    prompt = build_prompt(tied, [])
    assert "- Total Income: $10.13" in prompt
    assert "- Total Expenses: $0.38" in prompt
    assert "- Net Savings: $9.75" in prompt
