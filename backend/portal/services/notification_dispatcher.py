"""Bulk email dispatch with per-message retries and timeouts.

One dispatch sends the same rendered message to every recipient
concurrently. Each message gets up to ``max_attempts`` tries with
exponential backoff (1s, 2s, ...) and is bounded by ``message_timeout``;
the whole batch is bounded by ``batch_timeout``. Delivery problems are
reported in the returned summary and never raised, so the business action
that triggered the dispatch is never failed by it.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

from portal.core.config import settings
from portal.services.email_service import EmailService

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"

TIMEOUT_ERROR = "timeout"
BATCH_TIMEOUT_ERROR = "global timeout exceeded"


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None  # type: ignore[union-attr]


@dataclass(frozen=True)
class NotificationTarget:
    email: str
    display_name: str = ""


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    html: str
    text: str


@dataclass
class NotificationResult:
    email: str
    status: str = STATUS_FAILED
    attempt: int = 0
    error: str | None = None


@dataclass
class DispatchSummary:
    results: list[NotificationResult] = field(default_factory=list)
    attempted: int = 0
    dropped: int = 0
    total_time: float = 0.0  # milliseconds
    timed_out: bool = False
    error: str | None = None

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.status == STATUS_SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == STATUS_FAILED)

    @property
    def success_rate(self) -> float:
        if not self.results:
            return 0.0
        return self.successful / len(self.results)

    @property
    def avg_response_time(self) -> float:
        if not self.results:
            return 0.0
        return self.total_time / len(self.results)

    @property
    def total_retries(self) -> int:
        return sum(max(r.attempt - 1, 0) for r in self.results)

    @property
    def message(self) -> str:
        return f"Notificaciones enviadas: {self.successful} exitosas, {self.failed} fallidas"


class NotificationDispatcher:
    def __init__(
        self,
        email_service: EmailService | None = None,
        *,
        max_attempts: int | None = None,
        message_timeout: float | None = None,
        batch_timeout: float | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.email_service = email_service or EmailService()
        self.max_attempts = max_attempts or settings.NOTIFICATION_MAX_ATTEMPTS
        self.message_timeout = message_timeout or settings.NOTIFICATION_MESSAGE_TIMEOUT
        self.batch_timeout = batch_timeout or settings.NOTIFICATION_BATCH_TIMEOUT
        self.sleep = sleep
        self.clock = clock

    @staticmethod
    def backoff_delay(attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt``."""
        return float(2 ** (attempt - 1))

    @staticmethod
    def split_targets(
        targets: Iterable[NotificationTarget],
    ) -> tuple[list[NotificationTarget], list[NotificationTarget]]:
        """Separate syntactically valid recipients from the rest."""
        valid: list[NotificationTarget] = []
        invalid: list[NotificationTarget] = []
        for target in targets:
            (valid if is_valid_email(target.email) else invalid).append(target)
        return valid, invalid

    async def _send_with_retry(
        self, target: NotificationTarget, message: RenderedMessage, result: NotificationResult
    ) -> NotificationResult:
        for attempt in range(1, self.max_attempts + 1):
            result.attempt = attempt
            try:
                await self.email_service.send_email(
                    to=target.email,
                    subject=message.subject,
                    html_body=message.html,
                    text_body=message.text,
                )
            except Exception as exc:
                result.error = str(exc) or exc.__class__.__name__
                logger.warning(
                    "Attempt %d/%d to %s failed: %s",
                    attempt,
                    self.max_attempts,
                    target.email,
                    result.error,
                )
                if attempt < self.max_attempts:
                    await self.sleep(self.backoff_delay(attempt))
                continue

            result.status = STATUS_SUCCESS
            result.error = None
            return result

        logger.error("All %d attempts to %s failed", self.max_attempts, target.email)
        result.status = STATUS_FAILED
        return result

    async def _deliver(self, target: NotificationTarget, message: RenderedMessage) -> NotificationResult:
        result = NotificationResult(email=target.email)
        try:
            return await asyncio.wait_for(
                self._send_with_retry(target, message, result),
                timeout=self.message_timeout,
            )
        except TimeoutError:
            logger.warning(
                "Delivery to %s timed out after %.0fs", target.email, self.message_timeout
            )
            result.status = STATUS_FAILED
            result.error = TIMEOUT_ERROR
            return result

    async def dispatch(
        self, targets: Iterable[NotificationTarget], message: RenderedMessage
    ) -> DispatchSummary:
        """Send ``message`` to every valid target and summarise the outcome.

        Results are listed in completion order. If the batch deadline fires
        first, unfinished deliveries are cancelled and the summary carries the
        results gathered so far with ``timed_out`` set.
        """
        valid, invalid = self.split_targets(targets)
        if invalid:
            logger.info("Dropped %d recipients with invalid email addresses", len(invalid))

        summary = DispatchSummary(attempted=len(valid), dropped=len(invalid))
        if not valid:
            return summary

        started = self.clock()
        tasks = [asyncio.create_task(self._deliver(t, message)) for t in valid]
        collected: set[int] = set()
        try:
            for next_done in asyncio.as_completed(tasks, timeout=self.batch_timeout):
                result = await next_done
                collected.add(id(result))
                summary.results.append(result)
        except TimeoutError:
            summary.timed_out = True
            summary.error = BATCH_TIMEOUT_ERROR
            for task in tasks:
                if task.done() and not task.cancelled() and id(task.result()) not in collected:
                    summary.results.append(task.result())
                elif not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error(
                "Dispatch deadline of %.0fs exceeded: %d of %d deliveries finished",
                self.batch_timeout,
                len(summary.results),
                len(valid),
            )

        summary.total_time = (self.clock() - started) * 1000
        logger.info(
            "Dispatch finished: %d successful, %d failed, %d retries",
            summary.successful,
            summary.failed,
            summary.total_retries,
        )
        return summary
