"""
The `crypt` package provides cryptographic utilities that secure
authentication workflows and account data.

Contents
--------
- encrypt_decrypt
    Utility module exposing the `EncryptionDec` class:
        * `hash_password` - hashes plaintext passwords using bcrypt
        * `check_passwords` - verifies a plaintext password against a hashed one
        * `check_unknown_account` - equal-cost comparison for logins with an unknown email
        * `is_valid_password` - length policy (6 characters to 72 bytes) applied at registration
"""
