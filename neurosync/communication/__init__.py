"""
Dashboard communication

This module publishes session state to external displays.
"""

from .dashboard_sender import DashboardSender, build_message

__all__ = ['DashboardSender', 'build_message']
