# anymessage/utils/__init__.py

"""
Utility module initialization file.

Exposes the encryption helpers used to protect integration credentials.
"""

from .security import FernetEncryptor, generate_fernet_key

__all__ = ["FernetEncryptor", "generate_fernet_key"]
