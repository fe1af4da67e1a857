"""
Statement-level nodes.
"""

from .ddl import (
    AlterEnum,
    AlterTable,
    CreateEnum,
    CreateIndex,
    CreateTable,
    DropEnum,
    DropIndex,
    DropTable,
    IndexModifier,
)
from .dml import Delete, Insert, Select, Union, UnionJoiner, UnionType, Update
from .triggers import (
    CreateTrigger,
    DropTrigger,
    TriggerEach,
    TriggerEvent,
    TriggerOrder,
    TriggerTiming,
    TriggerWhen,
)

__all__ = [
    "AlterEnum",
    "AlterTable",
    "CreateEnum",
    "CreateIndex",
    "CreateTable",
    "CreateTrigger",
    "Delete",
    "DropEnum",
    "DropIndex",
    "DropTable",
    "DropTrigger",
    "IndexModifier",
    "Insert",
    "Select",
    "TriggerEach",
    "TriggerEvent",
    "TriggerOrder",
    "TriggerTiming",
    "TriggerWhen",
    "Union",
    "UnionJoiner",
    "UnionType",
    "Update",
]
