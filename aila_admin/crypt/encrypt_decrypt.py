import bcrypt

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72


class EncryptionDec:
    """
    Utility class for password hashing and password policy checks.

    Methods
    -------
    hash_password(text: str) -> str
        Hashes a plaintext password using bcrypt with a generated salt.
    check_passwords(plain_text: str, passwd: str) -> bool
        Verifies a plaintext password against a hashed password.
    check_unknown_account(plain_text: str) -> bool
        Runs a comparison against a throwaway hash so that a login for an
        unknown email costs the same as one with a wrong password.
    is_valid_password(password: str) -> bool
        Validates that a password has at least `MIN_PASSWORD_LENGTH` characters
        and at most `MAX_PASSWORD_BYTES` UTF-8 bytes.
    """

    _dummy_hash = None

    def hash_password(self, text: str) -> str:
        """
        Hash a plaintext password using bcrypt.

        Parameters
        ----------
        text : str
            The plaintext password.

        Returns
        -------
        str
            The bcrypt-hashed password (UTF-8 decoded).
        """
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(text.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def check_passwords(self, plain_text: str, passwd: str) -> bool:
        """
        Verify if a plaintext password matches a hashed password.

        Returns
        -------
        bool
            True if the password matches, False otherwise (including malformed hashes).
        """
        try:
            return bcrypt.checkpw(plain_text.encode("utf-8"), passwd.encode("utf-8"))
        except ValueError:
            return False

    def check_unknown_account(self, plain_text: str) -> bool:
        if EncryptionDec._dummy_hash is None:
            EncryptionDec._dummy_hash = self.hash_password("unknown-account")
        self.check_passwords(plain_text, EncryptionDec._dummy_hash)
        return False

    def is_valid_password(self, password: str) -> bool:
        # bcrypt refuses input longer than 72 bytes
        return len(password) >= MIN_PASSWORD_LENGTH and len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES
