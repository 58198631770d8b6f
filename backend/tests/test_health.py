import logging

import pytest
from httpx import AsyncClient

from herbtrace import __version__
from herbtrace.logging_config import setup_logging


@pytest.mark.asyncio
async def test_health_reports_ledger_state(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "version": __version__,
        "authority": "0xAuthority",
        "zones": 0,
    }


@pytest.mark.asyncio
async def test_health_counts_registered_zones(client: AsyncClient):
    await client.post(
        "/api/zones",
        json={
            "name": "Valley",
            "minLatitude": 10_000_000,
            "maxLatitude": 20_000_000,
            "minLongitude": 70_000_000,
            "maxLongitude": 80_000_000,
        },
        headers={"X-Caller-Identity": "0xAuthority"},
    )
    assert (await client.get("/api/health")).json()["zones"] == 1


@pytest.mark.asyncio
async def test_cors_allows_frontend_origin(client: AsyncClient):
    response = await client.options(
        "/api/zones",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert "http://localhost:5173" in response.headers.get(
        "access-control-allow-origin", ""
    )


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    try:
        log_file = setup_logging(tmp_path)
        added = [h for h in root_logger.handlers if h not in before]
        assert log_file.parent == tmp_path
        assert log_file.name.startswith("herbtrace-")

        setup_logging(tmp_path)
        assert [h for h in root_logger.handlers if h not in before] == added
        assert logging.getLogger("aiosqlite").level == logging.WARNING
    finally:
        for handler in root_logger.handlers[:]:
            if handler not in before:
                root_logger.removeHandler(handler)
                handler.close()
