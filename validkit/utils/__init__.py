"""
Utility modules for validkit.
"""
