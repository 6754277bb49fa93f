"""Web Search Examples.

- research_agent.py: A ReAct agent that searches the web and cites its sources
"""
