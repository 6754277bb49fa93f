"""Streaming Examples.

Showing an answer while it is being written:
- console_streaming.py: Tokens from a model, a chain and a graph node
- web_streaming.py: Server-sent events from the FastAPI app, read with httpx
"""
