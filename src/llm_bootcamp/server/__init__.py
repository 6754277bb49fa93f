"""Web server streaming chat and agent output as server-sent events."""

from llm_bootcamp.server.app import create_app

__all__ = ["create_app", "run"]


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the chat endpoints with uvicorn using the configured model."""
    import uvicorn

    from llm_bootcamp.core.logging import setup_logging

    setup_logging()
    uvicorn.run(create_app(), host=host, port=port)
