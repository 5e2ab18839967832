"""
menuhours - availability and scheduling engine for restaurant menus.
"""

__version__ = "0.1.0"
