from cryptography.fernet import Fernet, InvalidToken
from typing import Optional
import base64
from .logger import get_logger
from ..config import get_settings

logger = get_logger(__name__)

class FernetEncryption:
    """Handles encryption and decryption of sensitive data."""

    def __init__(self, key: Optional[str] = None):
        """
        Initialize with encryption key.

        Args:
            key: Fernet key; falls back to ENCRYPTION_KEY, then to a fresh
                 process-local key
        """
        key_str = key or get_settings().ENCRYPTION_KEY

        if not key_str:
            logger.debug("No encryption key configured, generating an ephemeral key")
            key_str = Fernet.generate_key().decode()

        try:
            key_bytes = base64.urlsafe_b64decode(key_str)

            if len(key_bytes) != 32:
                raise ValueError(f"Invalid key length: {len(key_bytes)} bytes. Expected 32 bytes.")

            self.cipher_suite = Fernet(key_str.encode() if isinstance(key_str, str) else key_str)
            logger.debug("Fernet encryption initialized successfully")

        except Exception as e:
            logger.error(f"Invalid encryption key format: {str(e)}")
            raise ValueError("Encryption key must be 32 url-safe base64-encoded bytes") from e

    def encrypt(self, data: str) -> str:
        """Encrypt string data."""
        if not isinstance(data, str):
            raise ValueError(f"Data must be string, got {type(data)}")

        return self.cipher_suite.encrypt(data.encode()).decode()

    def decrypt(self, encrypted_data: str) -> str:
        """Decrypt encrypted string."""
        if not isinstance(encrypted_data, str):
            raise ValueError(f"Encrypted data must be string, got {type(encrypted_data)}")

        try:
            return self.cipher_suite.decrypt(encrypted_data.encode()).decode()
        except InvalidToken:
            logger.error("Decryption error: token was not produced with this key")
            raise
