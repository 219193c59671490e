#!/usr/bin/env python3
"""
Main entry point for the TMI client
"""

import sys

from tmi_client.cli import main

if __name__ == "__main__":
    sys.exit(main())
