"""Configuration module for the JMdict kana index builder.

This module handles pipeline settings:
- ConfigManager: JSON-based settings persistence
- PipelineConfig: Settings dataclass
- Paths: Default folders and application data directories
"""
