from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Wrapper every successful API response is returned in."""

    success: bool = True
    message: str
    data: Optional[T] = None
