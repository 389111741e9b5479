# pepk
"""
Hybrid public-key encryption for exporting private keys.

Modules:
- core_crypto: fixed-width integer codec, P-256 points, HKDF
- hybrid: recipient keys, ECDH, AES-GCM, the encrypted record format
- errors: exception hierarchy
"""

__version__ = "1.0.0"
