# Hybrid Encryption Module
"""
Hybrid encryption implementations including:
- Recipient public key parsing (4-byte key id + 64-byte P-256 point)
- Ephemeral ECDH (P-256) key agreement
- HKDF-SHA256 key derivation
- AES-GCM data encapsulation

Record format: [version | key id | ephemeral point | nonce | ciphertext | tag]
"""

from .keys import (
    RecipientPublicKey,
    parse_public_key,
    generate_ephemeral_key,
    deserialize_private_key,
    ecdh,
    from_hex,
    KEY_ID_LENGTH,
    PUBLIC_KEY_LENGTH,
)

from .encrypter import (
    HybridEncrypter,
    HybridCiphertext,
    dem_encrypt,
    generate_nonce,
    encrypt_private_key,
    get_ciphertext_info,
    CIPHERTEXT_OVERHEAD,
)

__all__ = [
    'RecipientPublicKey',
    'parse_public_key',
    'generate_ephemeral_key',
    'deserialize_private_key',
    'ecdh',
    'from_hex',
    'KEY_ID_LENGTH',
    'PUBLIC_KEY_LENGTH',
    'HybridEncrypter',
    'HybridCiphertext',
    'dem_encrypt',
    'generate_nonce',
    'encrypt_private_key',
    'get_ciphertext_info',
    'CIPHERTEXT_OVERHEAD',
]
