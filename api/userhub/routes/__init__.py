from . import auth, health, users  # noqa: F401
