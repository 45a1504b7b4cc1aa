"""
Notely Backend - Note Taking REST API

Notes and users kept in a relational store, with bearer-token
authentication for note creation.

Version: 1.0.0
"""

__version__ = "1.0.0"
