"""Allow running the CLI as: python -m crypto_alert <command>."""

from crypto_alert.cli import main

main()
