"""
Services compose components into the stateful objects the UI holds.

- login.py -> LoginController (bootstrap, credential sign-in, password reset)
"""

from src.services.login import INITIALIZING_MESSAGE, LoginController

__all__ = [
    "INITIALIZING_MESSAGE",
    "LoginController",
]
