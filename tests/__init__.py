"""Pytest configuration file to set up the Python path for testing."""

import sys
from pathlib import Path

# Project root holds app.py, configs.py and the portfolio_api package
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))
