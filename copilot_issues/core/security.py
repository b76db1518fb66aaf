# Verifies the signature Copilot attaches to every agent payload.
# Date: 2026-10-19
# Version: 0.1.0

import base64
import binascii
import httpx
from typing import Dict, Optional
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from copilot_issues.utils.logger import console

SIGNATURE_HEADER = "Github-Public-Key-Signature"
KEY_IDENTIFIER_HEADER = "Github-Public-Key-Identifier"


class SignatureVerifier:
    """
    Checks ECDSA (P-256, SHA-256) signatures over raw request bodies.

    Keys are indexed by their GitHub key identifier. When a request names an
    unknown identifier, or none at all, the current key is used.
    """
    def __init__(self, public_keys: Dict[str, ec.EllipticCurvePublicKey], current: Optional[str] = None):
        if not public_keys:
            raise ValueError("at least one public key is required")
        self._keys = dict(public_keys)
        self._current = current if current in self._keys else next(iter(self._keys))

    @classmethod
    def from_pem(cls, pem: str, identifier: str = "configured") -> "SignatureVerifier":
        key = serialization.load_pem_public_key(pem.encode("utf-8"))
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise ValueError("payload signing key must be an elliptic curve key")
        return cls({identifier: key}, current=identifier)

    @classmethod
    def from_github(cls, keys_url: str, timeout: float = 10.0) -> "SignatureVerifier":
        """
        Loads the keys GitHub publishes for Copilot payload signing, e.g.
        https://api.github.com/meta/public_keys/copilot_api
        """
        response = httpx.get(keys_url, timeout=timeout)
        response.raise_for_status()
        keys: Dict[str, ec.EllipticCurvePublicKey] = {}
        current = None
        for entry in response.json().get("public_keys", []):
            key = serialization.load_pem_public_key(entry["key"].encode("utf-8"))
            if not isinstance(key, ec.EllipticCurvePublicKey):
                continue
            keys[entry["key_identifier"]] = key
            if entry.get("is_current"):
                current = entry["key_identifier"]
        console.info(f"Loaded {len(keys)} Copilot payload signing keys from {keys_url}")
        return cls(keys, current=current)

    def verify(self, body: bytes, signature: Optional[str], key_identifier: Optional[str] = None) -> bool:
        if not signature:
            console.warning("Request carries no payload signature.")
            return False
        try:
            der_signature = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError):
            console.warning("Payload signature is not valid base64.")
            return False

        key = self._keys.get(key_identifier or "", self._keys[self._current])
        try:
            key.verify(der_signature, body, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            console.warning("Payload signature does not match the request body.")
            return False
        return True
