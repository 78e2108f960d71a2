from pydantic import BaseModel
from typing import Optional

class FormStatus(BaseModel):
    open: bool
    loading: bool
    has_captured_image: bool

class CaptureStatus(BaseModel):
    state: str
    previewing: bool
    has_captured_image: bool

class DeleteConfirmation(BaseModel):
    pending: Optional[str] = None
    message: Optional[str] = None
