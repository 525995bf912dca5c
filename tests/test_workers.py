import json

import pytest
import redis.asyncio as redis

from app.services import notification_service
from app.workers import tasks_settlement


class FakeRedis:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published = []
        self.closed = False

    async def publish(self, channel, payload):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.published.append((channel, payload))
        return 1

    async def aclose(self):
        self.closed = True


def test_enqueue_settlement_uses_configured_delay(monkeypatch):
    calls = []
    monkeypatch.setattr(
        tasks_settlement.settle_payment_order,
        "apply_async",
        lambda args, countdown: calls.append((args, countdown)),
    )

    tasks_settlement.enqueue_settlement("garage", 7)

    assert calls == [(["garage", 7], tasks_settlement.settings.ORDER_SETTLEMENT_DELAY_SECONDS)]


@pytest.mark.asyncio
async def test_send_publishes_to_client_channel(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(notification_service, "_get_client", lambda: fake)

    assert await notification_service.send(3, "Premium renewed") is True

    channel, payload = fake.published[0]
    assert channel == "notifications:client:3"
    assert json.loads(payload)["message"] == "Premium renewed"
    assert fake.closed


@pytest.mark.asyncio
async def test_send_reports_failure_without_raising(monkeypatch):
    fake = FakeRedis(fail=True)
    monkeypatch.setattr(notification_service, "_get_client", lambda: fake)

    assert await notification_service.send(3, "Premium renewed") is False
    assert fake.closed
