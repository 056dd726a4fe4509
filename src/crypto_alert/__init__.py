"""Crypto price tracker with one-shot threshold alerts."""

__version__ = "0.1.0"
