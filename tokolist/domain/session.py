"""Session models for the signed-in cashier/admin."""

from typing import Optional, Union

from pydantic import BaseModel, Field


class User(BaseModel):
    """The user object the backend returns on login"""
    id: Union[int, str]
    toko_id: Optional[Union[int, str]] = None
    nama_lengkap: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None


class Session(BaseModel):
    """Serialized session stored on disk between runs"""
    token: Optional[str] = Field(default=None, description="Bearer token, if any")
    user: Optional[User] = None

    @property
    def toko_id(self) -> Optional[Union[int, str]]:
        if self.user is None:
            return None
        return self.user.toko_id

    @property
    def has_toko(self) -> bool:
        return self.toko_id not in (None, "")
