#!/usr/bin/env python3
"""
MCP server that exposes the component design agent over stdio.

Run with: python -m design_lm.mcp_server
"""

import asyncio
import io
import json
import sys

from design_lm.errors import MalformedOutputError
from design_lm.main import design_new_component


def list_tools() -> dict:
    """Return available tools."""
    return {
        "tools": [
            {
                "name": "design_new_component",
                "description": "Design a new Vue component from a free-text request, picking the library components it should be built from.",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "prompt": {
                            "type": "string",
                            "description": "What the new component should do and look like"
                        }
                    },
                    "required": ["prompt"]
                }
            }
        ]
    }


def call_tool(name: str, arguments: dict) -> dict:
    """Execute a tool call."""
    if name == "design_new_component":
        return design_component(arguments)
    return {"error": f"Unknown tool: {name}"}


def _text_result(text: str, is_error: bool = False) -> dict:
    """Wrap text as an MCP tool result."""
    result = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


def _response(req_id, result: dict) -> dict:
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def _error(req_id, code: int, message: str) -> dict:
    return {"jsonrpc": "2.0", "id": req_id, "error": {"code": code, "message": message}}


def design_component(args: dict) -> dict:
    """
    Run the design agent for one request.

    The streamed output is collected in memory and returned alongside the
    decoded task. On malformed output the raw stream is returned with the
    error.
    """
    stream = io.StringIO()
    context: dict = {}

    try:
        design_task = asyncio.run(design_new_component(args["prompt"], stream, context))
    except MalformedOutputError as e:
        return _text_result(f"Error ({e.status_code}): {e}\nRaw output: {stream.getvalue()}", is_error=True)
    except Exception as e:
        return _text_result(f"Error: {str(e)}", is_error=True)

    output = {
        "design_task": design_task.model_dump(),
        "raw_output": stream.getvalue(),
    }
    return _text_result(json.dumps(output, indent=2))


def handle_request(request: dict) -> dict | None:
    """Handle incoming MCP request."""
    method = request.get("method", "")
    req_id = request.get("id")

    if method == "initialize":
        return _response(req_id, {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "design-agent", "version": "0.1.0"},
        })

    if method == "tools/list":
        return _response(req_id, list_tools())

    if method == "tools/call":
        params = request.get("params", {})
        return _response(req_id, call_tool(params.get("name"), params.get("arguments", {})))

    if method.startswith("notifications/"):
        return None  # Notifications get no response

    return _error(req_id, -32601, f"Unknown method: {method}")


def main():
    """Main loop - reads JSON-RPC from stdin, writes to stdout."""
    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue

        try:
            response = handle_request(json.loads(line))
        except json.JSONDecodeError as e:
            response = _error(None, -32700, f"Parse error: {e}")
        except Exception as e:
            response = _error(None, -32603, f"Internal error: {e}")

        if response:
            print(json.dumps(response), flush=True)


if __name__ == "__main__":
    main()
