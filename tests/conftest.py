"""Pytest configuration for bitsdecoder tests."""

import sys
from pathlib import Path

# Add the project root to the path so tests run without installing
project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))
