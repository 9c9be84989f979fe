"""
Core components of FailStack: stack capture and wrapped errors.

No side effects on import.
"""
