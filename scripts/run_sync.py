#!/usr/bin/env python3
"""
Cron job script to run the scheduled cost sync.
Add to crontab: 0 1 * * * cd /path/to/app && /path/to/venv/bin/python scripts/run_sync.py

Accepts the same options as the cost-sync command (e.g. --dry-run).
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cost_sync.main import main


if __name__ == "__main__":
    sys.exit(main())
