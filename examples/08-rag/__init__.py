"""Retrieval Examples.

- rag_pipeline.py: Chunk, embed and retrieve a travel policy, then answer from it
"""
