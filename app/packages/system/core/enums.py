"""枚举定义：约束菜单类型与业务错误码的可选值。"""

from enum import Enum, IntEnum


class MenuTypeEnum(str, Enum):
    """菜单节点类型，按钮仅用于细粒度授权，不参与导航渲染。"""

    DIRECTORY = "directory"
    MENU = "menu"
    BUTTON = "button"


# 不含按钮时允许返回的类型集合
NAVIGATION_MENU_TYPES = frozenset({MenuTypeEnum.DIRECTORY.value, MenuTypeEnum.MENU.value})


class ErrorCodeEnum(IntEnum):
    """业务错误码，写入统一响应结构的 ``code`` 字段。"""

    MENU_NOT_FOUND = 400004
    PARENT_NOT_FOUND = 400005
    SERVICE_ERROR = 500500
