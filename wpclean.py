"""WordPress Backup Cleaner launcher.

Re-exports the CLI app from wpclean.cli so the tool can be started with
`python wpclean.py` from a source checkout.

Usage examples:
    # Scan the default web root
    python wpclean.py

    # Scan a specific directory and log deletions
    python wpclean.py /var/www --log-file cleanup.log
"""

from wpclean.cli import app

if __name__ == "__main__":
    app()
