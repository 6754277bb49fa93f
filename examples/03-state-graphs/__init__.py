"""State Graph Examples.

Nodes, edges and shared state before any agent shows up:
- graph_basics.py: Reducers, conditional edges and parallel nodes
- memory.py: Checkpointers, threads and trimming long histories
"""
