# Core Cryptography Module
"""
Core cryptographic building blocks including:
- Fixed-width big-endian integer codec
- NIST P-256 point serialization and validation
- HKDF-HMAC-SHA256 key derivation
"""
