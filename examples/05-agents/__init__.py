"""Agent Examples.

The tool loop packaged as a reusable agent:
- react_agent.py: create_react_agent with prompts, streaming, memory and a step limit
"""
