"""
ReadNLearn anchor service.
Re-anchors saved phrases in edited reading material and orders them for display.
"""

__version__ = "0.3.0"
