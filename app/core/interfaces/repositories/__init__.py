"""
Repository interfaces.

Storage contracts for in-flight assessment sessions. Completed reports are
owned by the caller and are never stored here.
"""
