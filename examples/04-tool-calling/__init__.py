"""Tool Calling Examples.

Letting the model ask the application to act:
- travel_tools.py: Tool schemas, a pydantic booking payload and the tool loop by hand and with ToolNode
"""
