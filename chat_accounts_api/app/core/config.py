"""
Service configuration.

Every knob of the chat accounts service (API bind address, MongoDB
location and collection names, logging, password hashing cost) is a
field of ``Settings`` whose default is read from an environment
variable of the same name in upper case.  With no variables set the
service talks to a MongoDB on localhost.  Tests and the maintenance
scripts build their own ``Settings`` or ``dataclasses.replace`` the
shared one instead of touching the environment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Settings for one service process; defaults come from the environment."""

    project_name: str = os.getenv("PROJECT_NAME", "Chat Accounts API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # MongoDB connection.  The collection names match the ones used by the
    # existing chat frontend so both can share a database.
    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "chat_accounts")
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
    user_collection: str = os.getenv("USER_COLLECTION", "User")
    message_collection: str = os.getenv("MESSAGE_COLLECTION", "Message")

    # PBKDF2 work factor for stored passwords.
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))


# Field defaults are evaluated when this module is first imported, so
# environment overrides have to be in place before that.
settings = Settings()
