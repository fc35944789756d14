from __future__ import annotations

import logging
from dataclasses import dataclass

from ..services.autofix_service import AutoFixService
from ..services.io_tables import IOService
from ..services.validate_service import ValidateService


@dataclass(frozen=True)
class Container:
    io: IOService
    validate: ValidateService
    autofix: AutoFixService


def build_container(base_logger_name: str) -> Container:
    base = logging.getLogger(base_logger_name)
    io = IOService(base.getChild("io"))
    validate = ValidateService(base.getChild("validate"))
    autofix = AutoFixService(base.getChild("autofix"))
    return Container(io=io, validate=validate, autofix=autofix)
