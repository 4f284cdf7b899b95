"""值对象基类"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseValueObject:
    """
    值对象基类

    子类使用 @dataclass(frozen=True) 声明，保证不可变。
    创建后自动调用 validate()，子类覆盖该方法实现不变量校验。
    """

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """校验值对象的不变量，默认不做任何检查"""
