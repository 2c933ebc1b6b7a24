# services/runtime_config.py
# Where the Meetup API key comes from.
#
#   SECRET_BACKEND=firestore  -> document {CONFIG_COLLECTION}/{CONFIG_STORE}, field {CONFIG_KEY}
#   SECRET_BACKEND=env        -> MEETUP_API_KEY

import inspect
import os

from google.api_core import exceptions as gcp_exceptions
from google.auth.exceptions import GoogleAuthError

from config import CONFIG_COLLECTION, SECRET_BACKEND
from services.errors import ConfigResolutionError


async def _close(db) -> None:
    # one client per lookup, so its gRPC channel has to go with it
    result = db.close()
    if inspect.isawaitable(result):
        await result


class FirestoreSecretStore:
    def __init__(self, db_factory=None, collection: str = CONFIG_COLLECTION):
        if db_factory is None:
            from services.db import new_db
            db_factory = new_db
        self.db_factory = db_factory
        self.collection = collection

    async def get_variable(self, store: str, key: str) -> str:
        # OSError: no project in the credentials, or the inline creds file could not be written
        try:
            db = self.db_factory()
        except (GoogleAuthError, OSError) as e:
            raise ConfigResolutionError(f"config store {store!r} unreachable: {e}") from e
        try:
            doc = await db.collection(self.collection).document(store).get()
        except (gcp_exceptions.GoogleAPIError, GoogleAuthError, OSError) as e:
            raise ConfigResolutionError(f"config store {store!r} unreachable: {e}") from e
        finally:
            await _close(db)
        data = doc.to_dict() if doc.exists else None
        if not data:
            raise ConfigResolutionError(f"config store {store!r} not found")
        value = data.get(key)
        if not value:
            raise ConfigResolutionError(f"{key!r} missing in config store {store!r}")
        return str(value)


class EnvSecretStore:
    """Local runs: the key comes straight from MEETUP_API_KEY (.env)."""

    def __init__(self, env_var: str = "MEETUP_API_KEY"):
        self.env_var = env_var

    async def get_variable(self, store: str, key: str) -> str:
        value = os.environ.get(self.env_var)
        if not value:
            raise ConfigResolutionError(f"{self.env_var} is not set ({store}/{key})")
        return value


def get_secret_store():
    if SECRET_BACKEND == "firestore":
        return FirestoreSecretStore()
    elif SECRET_BACKEND == "env":
        return EnvSecretStore()
    else:
        raise ValueError(f"Unknown secret backend: {SECRET_BACKEND}")
