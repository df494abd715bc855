"""Password hashing with bcrypt."""

import bcrypt

_ENCODING = "utf-8"


def hash_password(password: str) -> str:
    """Return the bcrypt hash of ``password`` as text, salted per call."""
    return bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode(_ENCODING), hashed_password.encode(_ENCODING))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
