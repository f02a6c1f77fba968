"""
Entry point for the backup-verifier console script.
"""
import sys


def main():
    """Main entry point for Backup Verifier."""
    from backup_verifier.cli.app import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
