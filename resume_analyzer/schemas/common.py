from __future__ import annotations

import uuid
from typing import Literal

RequirementLevel = Literal["required", "preferred", "nice-to-have"]
FileType = Literal["pdf", "docx"]


def new_id() -> str:
    return uuid.uuid4().hex
