"""Solidity compiler (soljson.js) version manager."""

__version__ = "0.2.0"
