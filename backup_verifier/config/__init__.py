"""
Configuration constants and runtime settings for Backup Verifier.
"""
