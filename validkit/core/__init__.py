"""Core components for validkit.

This package contains the base class for all validators, the exceptions it
raises, and the process-wide settings shared by every validator instance.
"""
