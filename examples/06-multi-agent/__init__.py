"""Multi-Agent Examples.

Two ways to split a travel assistant into specialists:
- supervisor.py: A coordinator delegates to flight and hotel agents
- swarm.py: Peer agents hand the conversation to each other
"""
