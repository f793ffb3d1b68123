"""
Advisor Service
Asks Gemini for short budgeting tips based on the current summary
"""
import logging
from typing import Any, List, Optional, Sequence

from google import genai

from app.models.transaction import FinancialSummary, Transaction, TransactionType
from app.utils.money import to_fixed

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Please configure your API Key to receive AI insights."
NO_ADVICE_MESSAGE = "Could not generate advice at this time."
ERROR_MESSAGE = "Sorry, I encountered an error while analyzing your finances."

DEFAULT_MODEL = "gemini-2.5-flash"
RECENT_LIMIT = 10


class AdviceInFlightError(RuntimeError):
    """Raised when advice is requested while another request is outstanding."""


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_prompt(
    summary: FinancialSummary,
    transactions: Sequence[Transaction],
    limit: int = RECENT_LIMIT,
) -> str:
    history = "\n".join(
        f"- {t.date}: {TransactionType(t.type).value.upper()} ${_format_number(t.amount)} ({t.description})"
        for t in list(transactions)[:limit]
    )
    return (
        "You are a helpful financial advisor. Analyze the following monthly financial "
        "summary and recent transactions.\n"
        "\n"
        "Summary:\n"
        f"- Total Income: ${to_fixed(summary.total_income)}\n"
        f"- Total Expenses: ${to_fixed(summary.total_expenses)}\n"
        f"- Net Savings: ${to_fixed(summary.savings)}\n"
        "\n"
        f"Recent Transactions (Last {limit}):\n"
        f"{history}\n"
        "\n"
        "Provide 3 short, actionable, and encouraging bullet points of advice to improve "
        "savings or manage expenses better. Keep it under 100 words total."
    )


class FinancialAdvisor:
    """
    Thin wrapper around the Gemini client. ``request_advice`` never raises:
    every failure turns into one of the fixed fallback strings.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        recent_limit: int = RECENT_LIMIT,
        client: Any = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._model = model
        self._recent_limit = recent_limit
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def request_advice(
        self,
        summary: FinancialSummary,
        transactions: Sequence[Transaction],
    ) -> str:
        if not self.configured:
            return NOT_CONFIGURED_MESSAGE

        try:
            prompt = build_prompt(summary, transactions, self._recent_limit)
            response = await self._get_client().aio.models.generate_content(
                model=self._model,
                contents=prompt,
            )
            text = getattr(response, "text", None)
        except Exception as e:
            logger.error(f"Error fetching financial advice: {str(e)}", exc_info=True)
            return ERROR_MESSAGE

        if not text:
            logger.warning("Advice response contained no text")
            return NO_ADVICE_MESSAGE
        return text


class AdviceSession:
    """
    The advice currently on display plus a one-at-a-time request guard.

    A store mutation while a request is outstanding makes its result stale:
    the caller still gets the text back, but it is not kept for display.
    """

    def __init__(self, advisor: FinancialAdvisor) -> None:
        self._advisor = advisor
        self._advice: Optional[str] = None
        self._in_flight = False
        self._generation = 0

    @property
    def advice(self) -> Optional[str]:
        return self._advice

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def request(
        self,
        summary: FinancialSummary,
        transactions: List[Transaction],
    ) -> str:
        if self._in_flight:
            raise AdviceInFlightError("An advice request is already in progress")

        self._in_flight = True
        self._advice = None
        generation = self._generation
        try:
            text = await self._advisor.request_advice(summary, transactions)
        finally:
            self._in_flight = False

        if generation == self._generation:
            self._advice = text
        else:
            logger.info("Discarding advice computed from outdated transactions")
        return text

    def invalidate(self) -> None:
        self._generation += 1
        self._advice = None

    def dismiss(self) -> None:
        self._advice = None
