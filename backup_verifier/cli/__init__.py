"""
Command line interface for Backup Verifier.
"""
