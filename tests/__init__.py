# pepk Test Suite
"""
Test suite including:
- Unit tests (codec, points, HKDF, key agreement, AES-GCM)
- Integration tests (full records decrypted by a reference recipient)
- Security tests (invalid inputs, tampering)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
