"""Streaming Over a Web Response Example.

The web app in ``llm_bootcamp.server`` sends tokens as server-sent events.
This script starts it with uvicorn in a background thread and reads the
stream back with httpx, the same way a browser's EventSource would.

Run the server on its own with:

    python -c "from llm_bootcamp.server import run; run()"

and try it with:

    curl -N -X POST localhost:8000/chat/stream \\
        -H 'content-type: application/json' \\
        -d '{"messages": [{"role": "user", "content": "Hello"}]}'

Features demonstrated:
- FastAPI StreamingResponse with text/event-stream
- One JSON object per ``data:`` line: token, done and error events
- Consuming the stream incrementally with httpx
"""

import json
import threading
import time

import httpx
import uvicorn

from llm_bootcamp import get_logger, setup_logging
from llm_bootcamp.server import create_app

setup_logging()
logger = get_logger(__name__)

HOST = "127.0.0.1"
PORT = 8765


def start_server() -> uvicorn.Server:
    """Start the app in a daemon thread and wait until it accepts requests.

    Returns:
        The running server, so the caller can stop it.
    """
    server = uvicorn.Server(uvicorn.Config(create_app(), host=HOST, port=PORT, log_level="warning"))
    threading.Thread(target=server.run, daemon=True).start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline:
            raise RuntimeError("Server did not start in time")
        time.sleep(0.05)
    logger.info("server_started", host=HOST, port=PORT)
    return server


def read_stream(question: str) -> str:
    """POST a conversation and print tokens as they are received.

    Args:
        question: The user's message.

    Returns:
        The assembled reply.
    """
    payload = {"messages": [{"role": "user", "content": question}]}
    collected: list[str] = []

    with httpx.stream("POST", f"http://{HOST}:{PORT}/chat/stream", json=payload, timeout=60) as response:
        response.raise_for_status()
        for line in response.iter_lines():
            if not line.startswith("data: "):
                continue
            event = json.loads(line[len("data: ") :])
            if event["type"] == "token":
                print(event["content"], end="", flush=True)
                collected.append(event["content"])
            elif event["type"] == "error":
                print(event["message"])
            elif event["type"] == "done":
                logger.info("stream_done", message_id=event["id"])
    print()
    return "".join(collected)


def main() -> None:
    """Run the web streaming example."""
    print("=" * 60)
    print("Web Streaming Example")
    print("=" * 60)

    server = start_server()
    try:
        print("\n--- Streamed Reply ---")
        reply = read_stream("Explain what a layover is in three sentences.")
        print(f"[Total length: {len(reply)} characters]")
    finally:
        server.should_exit = True


if __name__ == "__main__":
    main()
