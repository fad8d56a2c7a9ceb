"""
Session engine: formatting, turn cycle, session state machine and actions.
"""
