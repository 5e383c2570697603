#!/usr/bin/env python3
"""Solidity compiler version manager entry point"""

import sys

from solcvm.cli import main

if __name__ == "__main__":
    sys.exit(main())
