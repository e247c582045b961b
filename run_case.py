"""
Run a wind tunnel case defined by a YAML config file.

Usage:
    python run_case.py cases/naca2412.yaml --steps 200
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from aerotunnel.cli import main

if __name__ == "__main__":
    sys.exit(main())
