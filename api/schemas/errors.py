# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
