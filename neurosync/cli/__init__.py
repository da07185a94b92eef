"""
Command-line interface

This module provides the command-line entry point for NeuroSync.
"""

from .main import main

__all__ = ['main']
