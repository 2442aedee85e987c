"""Signing, error decoding, expiring caches, payload builders and response models for the Baidu PCS and Pan web APIs."""

__version__ = "0.1.0"