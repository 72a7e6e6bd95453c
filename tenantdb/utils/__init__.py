"""
Shared utilities: configuration, logging and response helpers.
"""
