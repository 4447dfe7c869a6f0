"""菜单管理接口的集成测试。"""

from fastapi.testclient import TestClient


def _find_by_name(items: list[dict], name: str) -> dict:
    return next(item for item in items if item["name"] == name)


def test_seeded_menu_tree_is_available(client: TestClient):
    """启动时写入的默认菜单树应可查询，且菜单列表默认不含按钮。"""
    resp = client.get("/api/v1/menus/all")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["code"] == 200
    names = {item["name"] for item in payload["data"]}
    assert {"系统管理", "菜单管理"}.issubset(names)
    assert "新增菜单" not in names

    menu_manage = _find_by_name(payload["data"], "菜单管理")
    buttons_resp = client.get("/api/v1/menus/buttons", params={"parent_id": menu_manage["id"]})
    assert buttons_resp.status_code == 200
    button_names = [item["name"] for item in buttons_resp.json()["data"]]
    assert button_names == ["新增菜单", "编辑菜单", "删除菜单"]

    perms_resp = client.get("/api/v1/menus/permissions", params={"menu_id": menu_manage["id"]})
    assert perms_resp.status_code == 200
    assert {item["api_url"] for item in perms_resp.json()["data"]} == {
        "/api/v1/menus/all",
        "/api/v1/menus/buttons",
        "/api/v1/menus/permissions",
    }


def test_menu_crud_flow(client: TestClient):
    """验证菜单的新增、查询、更新与删除流程。"""

    # 创建根目录
    create_root_resp = client.post(
        "/api/v1/menus",
        json={
            "name": "报表中心",
            "type": "directory",
            "code": "report",
            "icon": "chart",
            "route_path": "/report",
            "sort_order": 3,
        },
    )
    assert create_root_resp.status_code == 200
    assert create_root_resp.json() == {"msg": "创建菜单成功", "data": None, "code": 200}
    assert create_root_resp.headers.get("X-Request-ID")

    all_resp = client.get("/api/v1/menus/all")
    root = _find_by_name(all_resp.json()["data"], "报表中心")
    assert root["parent_id"] == 0
    assert root["type"] == "directory"

    # 创建子菜单与按钮
    create_menu_resp = client.post(
        "/api/v1/menus",
        json={
            "parent_id": root["id"],
            "name": "销售报表",
            "type": "menu",
            "code": "report:sales",
            "route_path": "sales",
            "component_path": "report/sales/index",
            "menu_perm_list": [
                {"api_url": "/api/v1/reports/sales", "api_method": "GET"},
                {"api_url": "/api/v1/reports/sales/export", "api_method": "post"},
            ],
        },
    )
    assert create_menu_resp.status_code == 200
    client.post(
        "/api/v1/menus",
        json={"parent_id": root["id"], "name": "导出销售报表", "type": "button", "code": "report:sales:export"},
    )

    children_resp = client.get("/api/v1/menus/buttons", params={"parent_id": root["id"]})
    children = children_resp.json()["data"]
    assert {item["name"] for item in children} == {"销售报表", "导出销售报表"}
    sales_menu = _find_by_name(children, "销售报表")

    without_buttons = client.get("/api/v1/menus/all", params={"has_button": False}).json()["data"]
    assert all(item["type"] != "button" for item in without_buttons)
    with_buttons = client.get("/api/v1/menus/all", params={"has_button": True}).json()["data"]
    assert any(item["name"] == "导出销售报表" for item in with_buttons)

    perms = client.get("/api/v1/menus/permissions", params={"menu_id": sales_menu["id"]}).json()["data"]
    assert {(item["api_url"], item["api_method"]) for item in perms} == {
        ("/api/v1/reports/sales", "GET"),
        ("/api/v1/reports/sales/export", "POST"),
    }

    # 更新菜单并整体替换接口权限
    update_resp = client.put(
        f"/api/v1/menus/{sales_menu['id']}",
        json={
            "name": "销售分析",
            "keep_alive": True,
            "menu_perm_list": [{"api_url": "/api/v1/reports/sales/summary", "api_method": "GET"}],
        },
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["msg"] == "更新菜单成功"

    perms = client.get("/api/v1/menus/permissions", params={"menu_id": sales_menu["id"]}).json()["data"]
    assert [(item["api_url"], item["api_method"]) for item in perms] == [("/api/v1/reports/sales/summary", "GET")]
    children = client.get("/api/v1/menus/buttons", params={"parent_id": root["id"]}).json()["data"]
    updated = _find_by_name(children, "销售分析")
    assert updated["keep_alive"] is True
    assert updated["route_path"] == "sales"

    # 删除菜单后接口权限一并清除
    delete_resp = client.delete(f"/api/v1/menus/{sales_menu['id']}")
    assert delete_resp.status_code == 200
    assert delete_resp.json()["msg"] == "删除菜单成功"
    perms = client.get("/api/v1/menus/permissions", params={"menu_id": sales_menu["id"]}).json()["data"]
    assert perms == []


def test_create_with_missing_parent_returns_business_code(client: TestClient):
    resp = client.post(
        "/api/v1/menus",
        json={"parent_id": 999999, "name": "无父级菜单", "type": "menu"},
    )
    assert resp.status_code == 404
    payload = resp.json()
    assert payload["code"] == 400005
    assert payload["msg"] == "当前父级菜单不存在，请调整后重新添加"
    assert payload["data"] is None


def test_delete_and_update_missing_menu_return_not_found(client: TestClient):
    delete_resp = client.delete("/api/v1/menus/999998")
    assert delete_resp.status_code == 404
    assert delete_resp.json()["code"] == 400004

    update_resp = client.put("/api/v1/menus/999998", json={"name": "不存在"})
    assert update_resp.status_code == 404
    assert update_resp.json()["msg"] == "当前菜单不存在或已删除"


def test_update_with_explicit_null_is_rejected_and_keeps_menu(client: TestClient):
    """显式传入 null 的必填字段返回 422，菜单的父级与类型保持不变。"""
    client.post("/api/v1/menus", json={"name": "空值校验目录", "type": "directory"})
    root = _find_by_name(client.get("/api/v1/menus/all").json()["data"], "空值校验目录")
    client.post(
        "/api/v1/menus",
        json={"parent_id": root["id"], "name": "空值校验菜单", "type": "menu", "sort_order": 4},
    )
    child = _find_by_name(
        client.get("/api/v1/menus/buttons", params={"parent_id": root["id"]}).json()["data"],
        "空值校验菜单",
    )

    sort_resp = client.put(f"/api/v1/menus/{child['id']}", json={"sort_order": None})
    assert sort_resp.status_code == 422
    assert sort_resp.json()["code"] == 422

    moved_resp = client.put(f"/api/v1/menus/{child['id']}", json={"parent_id": None, "type": None})
    assert moved_resp.status_code == 422

    children = client.get("/api/v1/menus/buttons", params={"parent_id": root["id"]}).json()["data"]
    unchanged = _find_by_name(children, "空值校验菜单")
    assert unchanged["parent_id"] == root["id"]
    assert unchanged["type"] == "menu"
    assert unchanged["sort_order"] == 4


def test_partial_update_only_touches_given_fields(client: TestClient):
    client.post(
        "/api/v1/menus",
        json={"name": "局部更新菜单", "type": "menu", "icon": "list", "route_path": "/partial", "sort_order": 2},
    )
    menu = _find_by_name(client.get("/api/v1/menus/all").json()["data"], "局部更新菜单")

    resp = client.put(f"/api/v1/menus/{menu['id']}", json={"is_external": True, "remark": None})
    assert resp.status_code == 200

    updated = _find_by_name(client.get("/api/v1/menus/all").json()["data"], "局部更新菜单")
    assert updated["is_external"] is True
    assert updated["remark"] is None
    assert updated["icon"] == "list"
    assert updated["route_path"] == "/partial"
    assert updated["sort_order"] == 2
    assert updated["type"] == "menu"
    assert updated["parent_id"] == 0


def test_invalid_payload_is_rejected_with_envelope(client: TestClient):
    resp = client.post(
        "/api/v1/menus",
        json={
            "name": "非法权限菜单",
            "type": "menu",
            "menu_perm_list": [{"api_url": "/api/v1/x", "api_method": "TRACE"}],
        },
    )
    assert resp.status_code == 422
    payload = resp.json()
    assert payload["code"] == 422
    assert payload["msg"] == "请求参数验证失败"

    bad_type = client.post("/api/v1/menus", json={"name": "非法类型", "type": "tab"})
    assert bad_type.status_code == 422


def test_health_check(client: TestClient):
    resp = client.get("/health", headers={"X-Request-ID": "health-check-1"})
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}
    assert resp.headers["X-Request-ID"] == "health-check-1"
