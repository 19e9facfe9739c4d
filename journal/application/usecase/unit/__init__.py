"""Unit and log use cases."""

from .create_log import CreateLogUseCase
from .create_unit import CreateUnitUseCase
from .delete_log import DeleteLogUseCase
from .delete_unit import DeleteUnitUseCase
from .get_unit import GetUnitUseCase
from .list_units import ListUnitsUseCase
from .update_log import UpdateLogUseCase
from .update_unit import UpdateUnitUseCase

__all__ = [
    "CreateLogUseCase",
    "CreateUnitUseCase",
    "DeleteLogUseCase",
    "DeleteUnitUseCase",
    "GetUnitUseCase",
    "ListUnitsUseCase",
    "UpdateLogUseCase",
    "UpdateUnitUseCase",
]
