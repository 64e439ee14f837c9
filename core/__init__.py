"""
Core package - shared utilities.
"""
