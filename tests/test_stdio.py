import json

import anyio
from mcp import types

from airtop_mcp.transports.stdio import run_stdio


class LinePipe:
    """
    Text-stream pair for ``run_stdio``: yields the given input lines, then
    keeps the input open until every expected response id has been written.
    """

    def __init__(self, lines, expected_ids):
        self.lines = lines
        self.written = []
        self.pending = set(expected_ids)
        self.answered = anyio.Event()

    def __aiter__(self):
        return self._read()

    async def _read(self):
        for line in self.lines:
            yield json.dumps(line) + "\n"
        await self.answered.wait()

    async def write(self, text):
        self.written.append(json.loads(text))
        self.pending.discard(self.written[-1].get("id"))
        if not self.pending:
            self.answered.set()

    async def flush(self):
        pass


def test_stdio_answers_requests_by_id(event_loop, gateway_context, fake_backend):
    lines = [
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {
                "protocolVersion": types.LATEST_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "pytest", "version": "0"},
            },
        },
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
        {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        {
            "jsonrpc": "2.0",
            "id": 3,
            "method": "tools/call",
            "params": {"name": "createWindow", "arguments": {"sessionId": "sess-1", "url": "https://example.com"}},
        },
    ]

    async def scenario():
        pipe = LinePipe(lines, expected_ids={1, 2, 3})
        with anyio.fail_after(5):
            await run_stdio(gateway_context, stdin=pipe, stdout=pipe)
        return pipe.written

    written = event_loop.run_until_complete(scenario())
    by_id = {message["id"]: message for message in written}

    assert by_id[1]["result"]["serverInfo"]["name"] == "airtop-mcp"
    tool_names = {tool["name"] for tool in by_id[2]["result"]["tools"]}
    assert {"createSession", "createWindow", "monitorForCondition"} <= tool_names
    assert by_id[3]["result"]["isError"] is False
    assert json.loads(by_id[3]["result"]["content"][0]["text"]) == {"windowId": "win-1"}
    assert fake_backend.called("windows.create") == [(("sess-1", "https://example.com"), {})]
