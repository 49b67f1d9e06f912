"""端到端集成测试

POST /tasks -> 落盘 PENDING -> 分发通道 -> Worker -> COMPLETED 全链路
"""

import asyncio

from httpx import AsyncClient


async def _wait_for_status(
    client: AsyncClient, task_id: int, status: str, timeout: float = 5.0
) -> dict:
    deadline = asyncio.get_running_loop().time() + timeout
    while True:
        resp = await client.get("/tasks")
        assert resp.status_code == 200
        for item in resp.json():
            if item["id"] == task_id and item["status"] == status:
                return item
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError(f"task {task_id} never reached {status}")
        await asyncio.sleep(0.05)


class TestPipelineEndToEnd:
    """创建 -> 立即查询 PENDING -> 延迟后 COMPLETED"""

    async def test_scenario_pending_then_completed(self, client: AsyncClient):
        resp = await client.post("/tasks", json={"title": "A", "description": "d"})
        assert resp.status_code == 201
        assert resp.content == b""

        # 立即查询：仍在处理中
        resp = await client.get("/tasks")
        assert resp.status_code == 200
        (pending,) = resp.json()
        assert pending["id"] == 1
        assert pending["title"] == "A"
        assert pending["description"] == "d"
        assert pending["status"] == "PENDING"

        completed = await _wait_for_status(client, 1, "COMPLETED")

        # 除状态外其余字段不变
        assert {k: v for k, v in completed.items() if k != "status"} == {
            k: v for k, v in pending.items() if k != "status"
        }

    async def test_completion_waits_for_processing_delay(
        self, client: AsyncClient, integration_app
    ):
        delay_s = integration_app.state.pipeline_config.processing_delay_s
        loop = asyncio.get_running_loop()
        started = loop.time()
        await client.post("/tasks", json={"title": "timed"})

        await _wait_for_status(client, 1, "COMPLETED")
        assert loop.time() - started >= delay_s * 0.9

    async def test_concurrent_creation_yields_unique_ids(self, client: AsyncClient):
        responses = await asyncio.gather(
            *(client.post("/tasks", json={"title": f"task-{i}"}) for i in range(10))
        )
        assert all(r.status_code == 201 for r in responses)

        items = (await client.get("/tasks")).json()
        ids = [item["id"] for item in items]
        assert len(ids) == 10
        assert len(set(ids)) == 10

    async def test_tasks_complete_in_submission_order(self, client: AsyncClient, integration_app):
        for title in ["one", "two", "three"]:
            resp = await client.post("/tasks", json={"title": title})
            assert resp.status_code == 201

        await _wait_for_status(client, 3, "COMPLETED", timeout=10.0)
        items = (await client.get("/tasks")).json()
        assert [i["status"] for i in items] == ["COMPLETED"] * 3
        assert integration_app.state.worker.stats.processed == 3

    async def test_malformed_request_does_not_reach_worker(
        self, client: AsyncClient, integration_app
    ):
        resp = await client.post(
            "/tasks", content=b"{broken", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400

        await asyncio.sleep(integration_app.state.pipeline_config.processing_delay_s * 1.5)
        assert (await client.get("/tasks")).json() == []
        assert integration_app.state.worker.stats.processed == 0
