"""
SQLite dictionary store for Sego.
"""
