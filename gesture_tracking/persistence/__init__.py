#!/usr/bin/env python3
"""
Gesture Template Persistence Package
"""

from .gesture_store import GestureStore

__all__ = ['GestureStore']
