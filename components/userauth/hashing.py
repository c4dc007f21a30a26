from __future__ import annotations
import bcrypt
from .contracts import PasswordHasherPort

# bcrypt only reads the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72

def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]

class BcryptPasswordHasher(PasswordHasherPort):
    """
    Salted, deliberately slow one-way hash. Each call to `hash` draws a new salt,
    so equal inputs give different outputs; compare with `verify`, never with ==.
    """
    def hash(self, plaintext: str, rounds: int = 10) -> str:
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=rounds)).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # not a bcrypt hash
            return False
