"""
Shared pytest configuration.
"""

import sys
from pathlib import Path

# Add project root to path for imports when the package is not installed
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
