"""
Credential contract for signed catalog requests.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """
    Access key, secret key and associate tag.
    Fixed for the lifetime of a client; the secret never appears in repr.
    """
    access_key: str
    secret_key: str = field(repr=False)
    associate_tag: str

    @property
    def is_complete(self) -> bool:
        return bool(self.access_key and self.secret_key and self.associate_tag)
