"""Utility module for the JMdict kana index builder.

This module provides cross-cutting utilities:
- Logging: Configured logging with secret redaction
"""
