"""
Task Manager API - task lifecycle management with an audit trail
"""

__version__ = "1.0.0"
