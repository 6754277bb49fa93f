"""Prompts and Chains Examples.

This module contains the first steps of the bootcamp:
- prompt_templates.py: String and chat templates, placeholders, partials
- chains.py: Piping prompts, models and parsers into chains
"""
