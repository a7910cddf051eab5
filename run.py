#!/usr/bin/env python
"""
Convenience script to run the Coherence Map from a source checkout.

Usage:
    python run.py
    COHERENCE_GRADE=All COHERENCE_LOG_LEVEL=debug python run.py
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from coherence_app.__main__ import main  # noqa: E402

if __name__ == "__main__":
    main()
