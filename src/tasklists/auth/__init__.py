"""Credentials and caller identity.

- Password hashing/verification (bcrypt over a SHA-256 pre-hash)
- Signed, time-bounded identity tokens (PyJWT, HS256)
- Operation context and the authentication guard
"""
