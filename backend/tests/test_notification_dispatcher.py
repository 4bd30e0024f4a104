"""Tests for the bulk email dispatcher: retries, timeouts and summaries."""

import asyncio

import pytest

from portal.services.notification_dispatcher import (
    BATCH_TIMEOUT_ERROR,
    STATUS_FAILED,
    STATUS_SUCCESS,
    TIMEOUT_ERROR,
    DispatchSummary,
    NotificationDispatcher,
    NotificationResult,
    NotificationTarget,
    RenderedMessage,
    is_valid_email,
)

MESSAGE = RenderedMessage(subject="Nuevo Comunicado: Hola", html="<p>Hola</p>", text="Hola")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeEmailService:
    """Records sends; fails the first ``failures[email]`` attempts per address."""

    def __init__(self, failures=None, delays=None):  # type: ignore[no-untyped-def]
        self.failures = dict(failures or {})
        self.delays = delays or {}
        self.sent: list[str] = []

    async def send_email(self, to, subject, html_body, text_body=None):  # type: ignore[no-untyped-def]
        if to in self.delays:
            await asyncio.sleep(self.delays[to])
        if self.failures.get(to, 0) > 0:
            self.failures[to] -= 1
            raise ConnectionError(f"relay refused {to}")
        self.sent.append(to)
        return True


class RecordingSleep:
    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.waits.append(delay)


def _dispatcher(email_service, **kwargs):  # type: ignore[no-untyped-def]
    kwargs.setdefault("max_attempts", 3)
    kwargs.setdefault("message_timeout", 45.0)
    kwargs.setdefault("batch_timeout", 300.0)
    kwargs.setdefault("sleep", RecordingSleep())
    return NotificationDispatcher(email_service, **kwargs)


def _targets(*emails: str) -> list[NotificationTarget]:
    return [NotificationTarget(email=e) for e in emails]


# ---------------------------------------------------------------------------
# Email validation
# ---------------------------------------------------------------------------


class TestIsValidEmail:
    @pytest.mark.parametrize("email", ["ana@empresa.co", "a.b+c@sub.domain.org", " ana@x.co "])
    def test_valid(self, email: str) -> None:
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", [None, "", "ana", "ana@empresa", "ana @x.co", "@x.co"])
    def test_invalid(self, email) -> None:  # type: ignore[no-untyped-def]
        assert not is_valid_email(email)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    @pytest.mark.asyncio
    async def test_all_successful(self) -> None:
        service = FakeEmailService()
        summary = await _dispatcher(service).dispatch(_targets("a@x.co", "b@x.co"), MESSAGE)

        assert sorted(service.sent) == ["a@x.co", "b@x.co"]
        assert summary.successful == 2
        assert summary.failed == 0
        assert summary.success_rate == 1.0
        assert summary.total_retries == 0
        assert all(r.attempt == 1 and r.error is None for r in summary.results)
        assert summary.timed_out is False

    @pytest.mark.asyncio
    async def test_invalid_addresses_dropped(self) -> None:
        service = FakeEmailService()
        summary = await _dispatcher(service).dispatch(
            _targets("ok@x.co", "not-an-email", "no@domain", ""), MESSAGE
        )

        assert service.sent == ["ok@x.co"]
        assert [r.email for r in summary.results] == ["ok@x.co"]
        assert summary.attempted == 1
        assert summary.dropped == 3

    @pytest.mark.asyncio
    async def test_no_valid_targets(self) -> None:
        summary = await _dispatcher(FakeEmailService()).dispatch(_targets("bad"), MESSAGE)
        assert summary.results == []
        assert summary.success_rate == 0.0
        assert summary.avg_response_time == 0.0

    @pytest.mark.asyncio
    async def test_retry_bound_and_backoff(self) -> None:
        sleep = RecordingSleep()
        service = FakeEmailService(failures={"a@x.co": 10})
        summary = await _dispatcher(service, sleep=sleep).dispatch(_targets("a@x.co"), MESSAGE)

        [result] = summary.results
        assert result.status == STATUS_FAILED
        assert result.attempt == 3
        assert result.error == "relay refused a@x.co"
        assert sleep.waits == [1.0, 2.0]
        assert sum(sleep.waits) >= 3.0
        assert summary.total_retries == 2

    @pytest.mark.asyncio
    async def test_success_after_retry(self) -> None:
        sleep = RecordingSleep()
        service = FakeEmailService(failures={"a@x.co": 1})
        summary = await _dispatcher(service, sleep=sleep).dispatch(
            _targets("a@x.co", "b@x.co"), MESSAGE
        )

        by_email = {r.email: r for r in summary.results}
        assert by_email["a@x.co"].status == STATUS_SUCCESS
        assert by_email["a@x.co"].attempt == 2
        assert by_email["a@x.co"].error is None
        assert by_email["b@x.co"].attempt == 1
        assert sleep.waits == [1.0]
        assert summary.total_retries == 1

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_other_targets(self) -> None:
        service = FakeEmailService(failures={"bad@x.co": 99})
        summary = await _dispatcher(service).dispatch(
            _targets("bad@x.co", "good@x.co"), MESSAGE
        )

        assert summary.successful == 1
        assert summary.failed == 1
        assert summary.success_rate == 0.5
        assert summary.message == "Notificaciones enviadas: 1 exitosas, 1 fallidas"

    @pytest.mark.asyncio
    async def test_per_message_timeout(self) -> None:
        service = FakeEmailService(delays={"slow@x.co": 5})
        summary = await _dispatcher(service, message_timeout=0.05).dispatch(
            _targets("slow@x.co", "fast@x.co"), MESSAGE
        )

        by_email = {r.email: r for r in summary.results}
        assert by_email["slow@x.co"].status == STATUS_FAILED
        assert by_email["slow@x.co"].error == TIMEOUT_ERROR
        assert by_email["fast@x.co"].status == STATUS_SUCCESS
        assert summary.timed_out is False

    @pytest.mark.asyncio
    async def test_global_timeout_returns_partial_results(self) -> None:
        service = FakeEmailService(delays={"slow@x.co": 10})
        summary = await _dispatcher(service, message_timeout=30, batch_timeout=0.1).dispatch(
            _targets("fast@x.co", "slow@x.co"), MESSAGE
        )

        assert summary.timed_out is True
        assert summary.error == BATCH_TIMEOUT_ERROR
        assert [r.email for r in summary.results] == ["fast@x.co"]
        assert "slow@x.co" not in service.sent

    @pytest.mark.asyncio
    async def test_results_in_completion_order(self) -> None:
        service = FakeEmailService(delays={"first@x.co": 0.05})
        summary = await _dispatcher(service).dispatch(
            _targets("first@x.co", "second@x.co"), MESSAGE
        )
        assert [r.email for r in summary.results] == ["second@x.co", "first@x.co"]

    @pytest.mark.asyncio
    async def test_total_time_uses_clock(self) -> None:
        ticks = iter([100.0, 100.5])
        summary = await _dispatcher(FakeEmailService(), clock=lambda: next(ticks)).dispatch(
            _targets("a@x.co", "b@x.co"), MESSAGE
        )
        assert summary.total_time == pytest.approx(500.0)
        assert summary.avg_response_time == pytest.approx(250.0)


class TestBackoffDelay:
    def test_exponential(self) -> None:
        assert [NotificationDispatcher.backoff_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


class TestDispatchSummary:
    def test_counters(self) -> None:
        summary = DispatchSummary(
            results=[
                NotificationResult(email="a@x.co", status=STATUS_SUCCESS, attempt=1),
                NotificationResult(email="b@x.co", status=STATUS_SUCCESS, attempt=3),
                NotificationResult(email="c@x.co", status=STATUS_FAILED, attempt=3, error="x"),
            ],
            total_time=900.0,
        )
        assert summary.successful == 2
        assert summary.failed == 1
        assert summary.total_retries == 4
        assert summary.avg_response_time == 300.0
        assert summary.success_rate == pytest.approx(2 / 3)
