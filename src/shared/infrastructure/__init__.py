"""
Shared Infrastructure Layer
Database, cache, and observability
"""
