#!/usr/bin/env python3
"""List Benin organizations from Firestore.

Usage:
    python scripts/list_benin_orgs.py

Requirements:
    - firebase-service-account.json at the repository root, or
      FIREBASE_SERVICE_ACCOUNT pointing at a service-account file
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from prsystem.maintenance.list_benin_orgs import main  # noqa: E402

if __name__ == "__main__":
    main()
