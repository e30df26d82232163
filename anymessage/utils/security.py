# anymessage/utils/security.py
import json
import logging
from typing import Any, Dict, Optional
from cryptography.fernet import Fernet, InvalidToken
from base64 import urlsafe_b64decode

logger = logging.getLogger(__name__)


def generate_fernet_key() -> str:
    """Generates a new Fernet key and returns it as a string."""
    key_bytes = Fernet.generate_key()
    return key_bytes.decode('utf-8')


class FernetEncryptor:
    """Handles encryption and decryption of integration credentials using Fernet."""

    def __init__(self, encryption_key: Optional[str]):
        """
        Initialize the encryptor with a Fernet-compatible key.

        Args:
            encryption_key: Base64-encoded Fernet key string, or None
        """
        self.fernet_instance: Optional[Fernet] = None
        self.key_valid = False

        if not encryption_key:
            logger.critical(
                "CRITICAL: ENCRYPTION_KEY is not set. "
                "Integration credential encryption/decryption will fail."
            )
            return

        try:
            key_bytes = encryption_key.encode('utf-8')
            # Fernet keys decode to exactly 32 bytes
            decoded_key_bytes = urlsafe_b64decode(key_bytes)
            if len(decoded_key_bytes) != 32:
                logger.error(
                    f"Invalid ENCRYPTION_KEY length after base64 decoding. "
                    f"Expected 32 bytes, got {len(decoded_key_bytes)}."
                )
                return
            self.fernet_instance = Fernet(key_bytes)
            self.key_valid = True
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to initialize FernetEncryptor with provided key. Error: {e}")

    def encrypt(self, data: str) -> Optional[str]:
        """
        Encrypt a string using Fernet encryption.

        Returns:
            Encrypted data as a string, or None if the key is unusable
        """
        if not self.fernet_instance or not self.key_valid:
            logger.error("Cannot encrypt: Fernet instance not available or key is invalid.")
            return None
        return self.fernet_instance.encrypt(data.encode('utf-8')).decode('utf-8')

    def decrypt(self, encrypted_data: str) -> Optional[str]:
        """
        Decrypt a Fernet-encrypted string.

        Returns:
            Decrypted plain text string, or None if decryption fails
        """
        if not self.fernet_instance or not self.key_valid:
            logger.error("Cannot decrypt: Fernet instance not available or key is invalid.")
            return None
        try:
            return self.fernet_instance.decrypt(encrypted_data.encode('utf-8')).decode('utf-8')
        except InvalidToken:
            logger.error(
                "Decryption failed: Invalid token. "
                "This may be due to an incorrect key or corrupted data."
            )
            return None

    def encrypt_json(self, payload: Dict[str, Any]) -> Optional[str]:
        """Serialize a JSON object and encrypt it."""
        return self.encrypt(json.dumps(payload, sort_keys=True))

    def decrypt_json(self, encrypted_data: str) -> Optional[Dict[str, Any]]:
        """Decrypt data produced by encrypt_json."""
        decrypted = self.decrypt(encrypted_data)
        if decrypted is None:
            return None
        return json.loads(decrypted)
