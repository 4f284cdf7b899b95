"""领域层公共基础模块"""

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import (
    DomainException,
    InvalidOperationException,
    InvalidValueObjectException,
)

__all__ = [
    "BaseValueObject",
    "DomainException",
    "InvalidOperationException",
    "InvalidValueObjectException",
]
