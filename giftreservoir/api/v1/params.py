"""Shared path parameter types"""

from typing import Annotated
from fastapi import Path

# Primary keys are 32-bit integers on PostgreSQL
MAX_ID = 2**31 - 1

EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]
