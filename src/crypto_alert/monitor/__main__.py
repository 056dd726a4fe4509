"""Allow running the monitor as: python -m crypto_alert.monitor [--config path]."""

import argparse

from crypto_alert.monitor.runner import main

parser = argparse.ArgumentParser(description="Crypto price alert monitor")
parser.add_argument("--config", default=None, help="Path to config.yaml")
args = parser.parse_args()
main(config_path=args.config)
