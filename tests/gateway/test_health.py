"""根路由与健康检查测试"""

from httpx import AsyncClient


class TestHealth:
    async def test_root(self, client: AsyncClient):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json()["name"] == "DevTaskFlow"

    async def test_health_always_ok(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.json() == {"status": "ok"}

    async def test_ready(self, client: AsyncClient):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["sqlite"] == "ok"
        assert data["checks"]["workspaces_dir"] == "ok"

    async def test_ready_reports_missing_workspaces_dir(self, client: AsyncClient, app):
        app.state.store_group.workspace_store.workspaces_dir.rmdir()

        resp = await client.get("/ready")

        assert resp.status_code == 503
        assert resp.json()["checks"]["workspaces_dir"].startswith("error")

    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.get("/health")
        assert len(resp.headers["x-request-id"]) == 26

    async def test_ready_reports_live_counts(self, client: AsyncClient, app, login, alice):
        await app.state.event_hub.subscribe()
        login(alice)

        data = (await client.get("/ready")).json()

        assert data["subscribers"] == 1
        assert data["sessions"] == 1

    async def test_ready_reports_closed_database(self, client: AsyncClient, app):
        await app.state.store_group.close()

        resp = await client.get("/ready")

        assert resp.status_code == 503
        assert resp.json()["checks"]["sqlite"].startswith("error")
