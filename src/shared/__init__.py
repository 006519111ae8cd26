"""
Shared Layer - Cross-Cutting Concerns
Configuration, logging, errors, and infrastructure adapters
"""
