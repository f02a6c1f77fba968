"""
Backup Verifier - wait for backup files to arrive and to be released by their writer.
"""

from backup_verifier.config.constants import VERSION

__version__ = VERSION
