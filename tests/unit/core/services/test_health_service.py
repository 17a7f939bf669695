import pytest

from notely import __version__
from notely.core.services.health_service import HealthService


class FakeScalarResult:
    def __init__(self, scalar_value):
        self._scalar_value = scalar_value

    def scalar(self):
        return self._scalar_value


class FakeSession:
    def __init__(self, ok=True):
        self.ok = ok
        self.executed = []

    async def execute(self, stmt):
        self.executed.append(stmt)
        if self.ok:
            return FakeScalarResult(1)
        raise RuntimeError("db down")


@pytest.mark.asyncio
async def test_get_health_status_all_ok():
    session = FakeSession(ok=True)
    resp = await HealthService(session).get_health_status()

    assert resp.status == "healthy"
    assert resp.version == __version__
    assert resp.checks["database"]["connected"] is True
    assert resp.checks["database"]["response_time_ms"] >= 0
    assert len(session.executed) == 1


@pytest.mark.asyncio
async def test_get_health_status_db_down():
    resp = await HealthService(FakeSession(ok=False)).get_health_status()

    assert resp.status == "unhealthy"
    assert resp.checks["database"] == {
        "connected": False,
        "status": "unhealthy",
        "response_time_ms": 0.0,
    }


@pytest.mark.asyncio
async def test_check_database_health_real_session(test_session):
    health = await HealthService(test_session).check_database_health()
    assert health["connected"] is True
