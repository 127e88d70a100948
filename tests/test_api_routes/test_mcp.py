"""
Tests for the MCP HTTP binding (POST /mcp and catalogue listings).
"""
from unittest.mock import patch


def post_rpc(client, method, params=None, request_id=1):
    body = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body)


class TestJsonRpcEndpoint:
    """Test POST /mcp."""

    def test_initialize(self, client):
        response = post_rpc(client, "initialize", {})
        assert response.status_code == 200
        assert response.json()["result"]["serverInfo"]["version"] == "2.0.0"

    def test_create_then_list(self, client):
        create = post_rpc(client, "tools/call", {
            "name": "create_task",
            "arguments": {"title": "HTTP task", "priority": "urgent", "tags": "web"},
        })
        assert create.json()["result"]["isError"] is False

        listing = post_rpc(client, "tools/call", {"name": "list_tasks", "arguments": {}}, request_id=2)
        text = listing.json()["result"]["content"][0]["text"]
        assert text.startswith("📋 Found 1 task(s):")
        assert "Priority: URGENT" in text

    def test_notification_returns_202(self, client):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert response.status_code == 202

    def test_batch(self, client):
        response = client.post("/mcp", json=[
            {"jsonrpc": "2.0", "id": 1, "method": "ping"},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        ])
        data = response.json()
        assert [item["id"] for item in data] == [1, 2]

    def test_empty_batch_is_invalid_request(self, client):
        response = client.post("/mcp", json=[])
        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32600

    def test_notification_only_batch_returns_202(self, client):
        response = client.post("/mcp", json=[{"jsonrpc": "2.0", "method": "notifications/initialized"}])
        assert response.status_code == 202

    def test_unknown_method(self, client):
        assert post_rpc(client, "nope").json()["error"]["code"] == -32601

    def test_internal_error_is_reported(self, client):
        with patch("taskmind.mcp.registry.MCPRegistry.list_tools", side_effect=RuntimeError("boom")):
            response = post_rpc(client, "tools/list")
        assert response.status_code == 200
        error = response.json()["error"]
        assert error["code"] == -32603
        assert "boom" in error["message"]

    def test_response_carries_request_id_header(self, client):
        response = post_rpc(client, "ping")
        assert response.headers["X-Request-ID"]


class TestCatalogueListings:
    def test_tools(self, client):
        tools = client.get("/mcp/tools").json()["tools"]
        create = next(tool for tool in tools if tool["name"] == "create_task")
        assert create["inputSchema"]["required"] == ["title"]
        assert create["inputSchema"]["properties"]["priority"]["default"] == "MEDIUM"

    def test_prompts(self, client):
        assert len(client.get("/mcp/prompts").json()["prompts"]) == 4

    def test_resources(self, client):
        data = client.get("/mcp/resources").json()
        assert len(data["resources"]) == 2
        assert len(data["resourceTemplates"]) == 3
