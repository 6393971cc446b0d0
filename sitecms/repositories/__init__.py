from .base import Repository
from .unit_of_work import UnitOfWork, get_unit_of_work

__all__ = ["Repository", "UnitOfWork", "get_unit_of_work"]
