from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_HASH_ALG = "256"


class Mode(str, Enum):
    NONE = "none"
    CREATE = "create"
    VERIFY = "verify"
    PARSE = "parse"


class RimIntent(BaseModel):
    """What the user asked the tool to do, as resolved from the command line."""

    model_config = ConfigDict(frozen=True)

    mode: Mode = Mode.NONE
    has_arguments: bool = False
    create_output_file: str = ""
    attributes_given: bool = False
    attributes_file: str = ""
    verify_input_path: Optional[str] = None
    parse_input_path: Optional[str] = None
    hash_alg: Optional[str] = None  # only meaningful for CREATE
    show_cert: bool = False
    keystore_given: bool = False
    keystore: str = ""

    @property
    def create(self) -> bool:
        return self.mode is Mode.CREATE

    @property
    def verify(self) -> bool:
        return self.mode is Mode.VERIFY

    @property
    def parse(self) -> bool:
        return self.mode is Mode.PARSE

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


class UsageRequest(BaseModel):
    """Parsing ended in usage output; ``message`` is prefixed as an error."""

    model_config = ConfigDict(frozen=True)

    message: Optional[str] = None
