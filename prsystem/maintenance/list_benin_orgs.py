"""List the organizations registered for Benin.

One-shot operational tool. Connects with the service account in
``firebase-service-account.json`` at the repository root (or the file named
by ``FIREBASE_SERVICE_ACCOUNT``), prints every matching organization and
exits. Errors are not handled: a failed connection or query aborts the run.

Usage:
    python scripts/list_benin_orgs.py
    pr-list-benin-orgs
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from firebase_admin import firestore
from google.cloud.firestore import Client as FirestoreClient
from google.cloud.firestore_v1.base_query import FieldFilter

from prsystem.config import ORGANIZATIONS_COLLECTION, SERVICE_ACCOUNT_FILENAME
from prsystem.infrastructure.firebase import get_app

COUNTRY = "Benin"

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def list_benin_orgs(db: FirestoreClient) -> None:
    orgs = (
        db.collection(ORGANIZATIONS_COLLECTION)
        .where(filter=FieldFilter("country", "==", COUNTRY))
        .stream()
    )
    print("Benin organizations:")
    for doc in orgs:
        data = doc.to_dict() or {}
        print(f"  - ID: {doc.id}, Name: {data.get('name')}, Code: {data.get('code')}")


def main() -> None:
    service_account = os.getenv("FIREBASE_SERVICE_ACCOUNT") or str(
        PROJECT_ROOT / SERVICE_ACCOUNT_FILENAME
    )
    app = get_app(service_account)
    list_benin_orgs(firestore.client(app=app))
    sys.exit(0)


if __name__ == "__main__":
    main()
