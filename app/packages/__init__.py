"""业务包目录：当前仅包含菜单管理所在的 ``system`` 包。"""
