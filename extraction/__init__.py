"""
extraction - Token extraction from raw chapter text.
"""
