"""常量定义：集中维护响应码与菜单模块使用的固定取值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

# 根菜单的父级标识，等于该值时视为顶层节点，不再校验父级是否存在
ROOT_MENU_PARENT_ID = 0

MENU_PERMISSION_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

# menus 表中不允许为空的可写字段，更新时显式传入 null 会被拒绝
NON_NULLABLE_MENU_FIELDS = frozenset({"parent_id", "name", "type", "sort_order", "is_external", "keep_alive"})
