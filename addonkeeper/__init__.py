# addonkeeper/__init__.py
"""Configuration core of a game add-on manager."""
