"""
Mock server example

Serves canned responses built from request snapshots.

- Each TCP connection is handled by a ConnectionHandler (one request per connection).
- Responses are materialized by a ResponseMapper; file bodies are read relative to this directory.

Run:
  uv run python examples/mock_server.py

Then try:
  curl -i http://127.0.0.1:8080/
  curl -i 'http://127.0.0.1:8080/echo?ids=1,2&x'
  curl -i -X POST http://127.0.0.1:8080/echo -H 'Content-Type: application/json' -d '{"hello": "there"}'
  curl -i http://127.0.0.1:8080/file
"""

from __future__ import annotations

from pathlib import Path

import anyio

from mockhttp import ConnectionHandler, LocalFileSystemHandler, RequestMessage, ResponseMapper, ResponseMessage


async def handle(req: RequestMessage) -> ResponseMessage:
    if req.path_segments == ("echo",):
        return ResponseMessage.json(
            {
                "method": req.method,
                "path": req.path,
                "query": {k: list(v) for k, v in (req.query or {}).items()},
                "body": req.body_as_json if req.body_as_json is not None else req.body,
                "detectedBodyType": req.detected_body_type,
                "userAgent": req.headers.get_first("User-Agent") if req.headers else None,
            },
            indented=True,
        )
    if req.path_segments == ("file",):
        return ResponseMessage.file(__file__, headers={"Content-Type": "text/x-python"})
    return ResponseMessage.text("hello from mockhttp\n")


async def main() -> None:
    mapper = ResponseMapper(LocalFileSystemHandler(Path(__file__).parent))
    handler = ConnectionHandler(handle, mapper)

    async with await anyio.create_tcp_listener(local_host="127.0.0.1", local_port=8080) as listener:
        print("Listening on http://127.0.0.1:8080")
        print("Press Ctrl-C to stop.")
        await listener.serve(handler)


if __name__ == "__main__":
    anyio.run(main)
