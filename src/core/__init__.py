"""Core domain package for explbot.

Core contains term normalization, ranking, querying and response building
without any Telegram or storage-specific code, keeping the business logic
portable.
"""
