# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Validation payloads: violation records and validation modes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ValidationMode", "Violation"]


class ValidationMode(str, Enum):
    """Whether an entity is being created or updated."""

    CREATE = "create"
    UPDATE = "update"


class Violation(BaseModel):
    """A single accumulated validation failure.

    Violations are data, never exceptions: an empty list means valid.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    code: str = Field(..., min_length=1, pattern=r"^[A-Z0-9_]+$")
    message: str = Field(..., min_length=1, max_length=255)
    field: str | None = Field(None, max_length=100)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
