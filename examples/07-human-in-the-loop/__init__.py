"""Human-in-the-Loop Examples.

- approval.py: Pause before a booking and approve, edit or reject it
- time_travel.py: Inspect checkpoints, replay and fork a thread
"""
