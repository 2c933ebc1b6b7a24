# services/db.py
import os

from google.cloud import firestore


def _from_inline_json():
    # Render/Cloud Run: service-account JSON lives in an env var, not in a file
    data = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS_JSON")
    if not data or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS"):
        return
    creds_path = "/tmp/gcp-creds.json"
    with open(creds_path, "w") as f:
        f.write(data)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = creds_path


def new_db() -> firestore.AsyncClient:
    # Flask runs every async view in its own event loop, and the async client
    # is tied to the loop it was created in: build one per request.
    _from_inline_json()
    return firestore.AsyncClient()
