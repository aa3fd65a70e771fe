"""test_category_routes: 카테고리 라우터 연결(wiring) 테스트.

각 엔드포인트가 올바른 순서의 의존성(스키마 검증 → 토큰 인증 → 사용자 인증)을 거쳐
올바른 컨트롤러에 도달하는지, 그리고 선언되지 않은 메서드/경로는 매칭되지 않는지 검증합니다.
"""

import importlib
from datetime import timedelta

import jwt
import pytest
from fastapi.routing import APIRoute
from httpx import AsyncClient

from core.config import settings
from dependencies.auth import get_current_user, verify_user_token
from main import app
from schemas.category_schemas import NAME_MAX_LENGTH
from utils.jwt_utils import create_access_token

category_router_module = importlib.import_module("routers.category_router")


def _route(method: str, path: str) -> APIRoute:
    return next(
        r
        for r in app.routes
        if isinstance(r, APIRoute) and r.path == path and method in r.methods
    )


def _chain(method: str, path: str) -> list:
    return [dep.call for dep in _route(method, path).dependant.dependencies]


# ==========================================
# 1. 라우트 테이블 구조
# ==========================================


class TestRouteTable:
    """라우트 등록과 의존성 순서 구조 테스트."""

    def test_only_five_category_routes(self):
        """/categories 아래에는 다섯 개의 (메서드, 경로) 조합만 문서화되어야 합니다."""
        bindings = {
            (method, r.path)
            for r in app.routes
            if isinstance(r, APIRoute)
            and r.include_in_schema
            and r.path.startswith("/categories")
            for method in r.methods
        }
        assert bindings == {
            ("POST", "/categories"),
            ("GET", "/categories"),
            ("GET", "/categories/{category_id}"),
            ("PUT", "/categories/{category_id}"),
            ("DELETE", "/categories/{category_id}"),
        }

    def test_create_chain_validates_before_auth(self):
        assert _chain("POST", "/categories") == [
            category_router_module.validate_create_category,
            verify_user_token,
            get_current_user,
        ]

    def test_read_chains_are_token_only(self):
        assert _chain("GET", "/categories") == [verify_user_token]
        assert _chain("GET", "/categories/{category_id}") == [verify_user_token]

    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    def test_write_chains_are_token_then_user(self, method):
        assert _chain(method, "/categories/{category_id}") == [
            verify_user_token,
            get_current_user,
        ]

    @pytest.mark.parametrize(
        "method,path,endpoint",
        [
            ("POST", "/categories", "create_category"),
            ("GET", "/categories", "get_categories"),
            ("GET", "/categories/{category_id}", "get_category"),
            ("PUT", "/categories/{category_id}", "update_category"),
            ("DELETE", "/categories/{category_id}", "delete_category"),
        ],
    )
    def test_handlers(self, method, path, endpoint):
        assert _route(method, path).endpoint is getattr(category_router_module, endpoint)

    @pytest.mark.parametrize(
        "method,endpoint,chain",
        [
            (
                "POST",
                "create_category",
                [
                    category_router_module.validate_create_category,
                    verify_user_token,
                    get_current_user,
                ],
            ),
            ("GET", "get_categories", [verify_user_token]),
        ],
    )
    def test_trailing_slash_routes_share_handler_and_chain(self, method, endpoint, chain):
        route = _route(method, "/categories/")

        assert route.include_in_schema is False
        assert route.endpoint is getattr(category_router_module, endpoint)
        assert _chain(method, "/categories/") == chain


# ==========================================
# 2. POST /categories
# ==========================================


@pytest.mark.asyncio
async def test_create_invalid_body_rejected_before_token_auth(
    client: AsyncClient, mock_user_lookup, mock_category_models
):
    """본문이 스키마를 통과하지 못하면 토큰이 없어도 400이어야 합니다."""
    res = await client.post("/categories", json={"name": "only name"})

    assert res.status_code == 400
    data = res.json()
    assert data["status"] is False
    assert data["code"] == 400
    assert data["body"] is None
    assert data["errors"][0]["error"] == "invalid_request_body"
    assert {"field": "description", "message": "Field required"} in data["errors"][0]["fields"]
    mock_user_lookup.assert_not_awaited()
    mock_category_models.create_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_valid_body_without_token(
    client: AsyncClient, mock_user_lookup, mock_category_models
):
    """본문이 유효해도 토큰이 없으면 401, 사용자 인증과 컨트롤러는 실행되지 않습니다."""
    res = await client.post(
        "/categories", json={"name": "Books", "description": "All kinds of books"}
    )

    assert res.status_code == 401
    assert res.json()["errors"][0]["error"] == "unauthorized"
    assert res.headers["www-authenticate"] == "Bearer"
    mock_user_lookup.assert_not_awaited()
    mock_category_models.create_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_not_found(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    """토큰은 유효하지만 사용자가 없으면 404, 컨트롤러는 실행되지 않습니다."""
    mock_user_lookup.return_value = None

    res = await client.post(
        "/categories",
        json={"name": "Books", "description": "All kinds of books"},
        headers=auth_headers,
    )

    assert res.status_code == 404
    assert res.json()["errors"][0]["error"] == "user_not_found"
    mock_user_lookup.assert_awaited_once()
    mock_category_models.create_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_success(
    client: AsyncClient, user, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.post(
        "/categories",
        json={"name": "  Books  ", "description": "All kinds of books"},
        headers=auth_headers,
    )

    assert res.status_code == 200
    data = res.json()
    assert data["status"] is True
    assert data["code"] == 200
    assert data["message"] == "Category created successfully"
    assert data["body"] == {
        "id": 1,
        "name": "Books",
        "description": "All kinds of books",
        "createdAt": "2022-11-10T21:45:49Z",
        "updatedAt": "2022-11-10T21:45:49Z",
    }
    mock_user_lookup.assert_awaited_once_with(user.id)
    mock_category_models.create_category.assert_awaited_once_with(
        name="Books", description="All kinds of books"
    )


@pytest.mark.asyncio
async def test_create_accepts_form_body(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.post(
        "/categories",
        data={"name": "Music", "description": "Albums and songs"},
        headers=auth_headers,
    )

    assert res.status_code == 200
    mock_category_models.create_category.assert_awaited_once_with(
        name="Music", description="Albums and songs"
    )


@pytest.mark.asyncio
async def test_create_length_limit_counts_trimmed_value(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    """길이 제한은 앞뒤 공백을 제거한 값에 적용됩니다."""
    name = "x" * NAME_MAX_LENGTH

    res = await client.post(
        "/categories",
        json={"name": f"  {name}  ", "description": "d"},
        headers=auth_headers,
    )

    assert res.status_code == 200
    mock_category_models.create_category.assert_awaited_once_with(
        name=name, description="d"
    )


@pytest.mark.asyncio
async def test_create_too_long_after_trim_rejected(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.post(
        "/categories",
        json={"name": " " + "x" * (NAME_MAX_LENGTH + 1) + " ", "description": "d"},
        headers=auth_headers,
    )

    assert res.status_code == 400
    assert res.json()["errors"][0]["fields"][0]["field"] == "name"
    mock_user_lookup.assert_not_awaited()
    mock_category_models.create_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_collection_trailing_slash_is_not_redirected(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    """/categories/ 도 리다이렉트 없이 같은 체인으로 처리되어야 합니다."""
    res = await client.post(
        "/categories/",
        json={"name": "Books", "description": "All kinds of books"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    mock_category_models.create_category.assert_awaited_once()

    res = await client.get("/categories/")
    assert res.status_code == 401

    res = await client.get("/categories/", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Categories retrieved successfully"


@pytest.mark.asyncio
async def test_create_unsupported_content_type(
    client: AsyncClient, mock_user_lookup, mock_category_models
):
    res = await client.post(
        "/categories",
        content="name=Books",
        headers={"Content-Type": "text/plain"},
    )

    assert res.status_code == 415
    assert res.json()["errors"][0]["error"] == "unsupported_media_type"
    mock_category_models.create_category.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_body", ["{not json", "[1, 2, 3]"])
async def test_create_malformed_json(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models, raw_body
):
    res = await client.post(
        "/categories",
        content=raw_body,
        headers={"Content-Type": "application/json", **auth_headers},
    )

    assert res.status_code == 400
    assert res.json()["errors"][0]["error"] == "invalid_request_body"
    mock_user_lookup.assert_not_awaited()


# ==========================================
# 3. GET /categories, GET /categories/{id}
# ==========================================


@pytest.mark.asyncio
async def test_list_requires_token(client: AsyncClient, mock_category_models):
    res = await client.get("/categories")

    assert res.status_code == 401
    mock_category_models.get_all_categories.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_success_skips_user_auth(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    """조회 라우트는 토큰 인증만 거치며 사용자 조회를 하지 않습니다."""
    res = await client.get("/categories", headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["message"] == "Categories retrieved successfully"
    assert [c["id"] for c in data["body"]] == [1]
    mock_user_lookup.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_id_requires_token(client: AsyncClient, mock_category_models):
    res = await client.get("/categories/1")

    assert res.status_code == 401
    mock_category_models.get_category_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_id_success(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.get("/categories/1", headers=auth_headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Category retrieved successfully"
    assert res.json()["body"]["name"] == "Books"
    mock_category_models.get_category_by_id.assert_awaited_once_with(1)
    mock_user_lookup.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_id_not_found(
    client: AsyncClient, auth_headers, mock_category_models
):
    mock_category_models.get_category_by_id.return_value = None

    res = await client.get("/categories/99", headers=auth_headers)

    assert res.status_code == 404
    assert res.json()["errors"][0]["error"] == "category_not_found"


@pytest.mark.asyncio
@pytest.mark.parametrize("category_id", ["0", "-3", "abc"])
async def test_get_by_id_invalid_id(
    client: AsyncClient, auth_headers, mock_category_models, category_id
):
    res = await client.get(f"/categories/{category_id}", headers=auth_headers)

    assert res.status_code == 400
    assert res.json()["errors"][0]["error"] == "invalid_category_id"
    mock_category_models.get_category_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_invalid_id_without_token_is_unauthorized(
    client: AsyncClient, mock_category_models
):
    """ID 형식 검사보다 토큰 인증이 먼저 실행됩니다."""
    res = await client.get("/categories/abc")

    assert res.status_code == 401


# ==========================================
# 4. 토큰 검증 실패 케이스
# ==========================================


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, user, mock_category_models):
    token = create_access_token(user.id, expires_delta=timedelta(minutes=-5))

    res = await client.get("/categories", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["errors"][0]["error"] == "token_expired"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "token",
    [
        jwt.encode({"sub": "7", "type": "access"}, "another-secret-key-0123456789abcdef", algorithm="HS256"),
        jwt.encode({"sub": "7", "type": "refresh"}, settings.SECRET_KEY, algorithm="HS256"),
        jwt.encode({"sub": "seven", "type": "access"}, settings.SECRET_KEY, algorithm="HS256"),
        "not-a-jwt",
    ],
)
async def test_invalid_tokens(client: AsyncClient, mock_category_models, token):
    res = await client.get("/categories", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["errors"][0]["error"] == "token_invalid"
    mock_category_models.get_all_categories.assert_not_awaited()


@pytest.mark.asyncio
async def test_non_bearer_scheme(client: AsyncClient, mock_category_models):
    res = await client.get("/categories", headers={"Authorization": "Basic dXNlcjpwYXNz"})

    assert res.status_code == 401
    assert res.json()["errors"][0]["error"] == "unauthorized"


# ==========================================
# 5. PUT /categories/{id}
# ==========================================


@pytest.mark.asyncio
async def test_update_requires_token(
    client: AsyncClient, mock_user_lookup, mock_category_models
):
    res = await client.put("/categories/1", json={"name": "New"})

    assert res.status_code == 401
    mock_user_lookup.assert_not_awaited()
    mock_category_models.update_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_not_found(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    mock_user_lookup.return_value = None

    res = await client.put("/categories/1", json={"name": "New"}, headers=auth_headers)

    assert res.status_code == 404
    assert res.json()["errors"][0]["error"] == "user_not_found"
    mock_category_models.update_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_success(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.put("/categories/1", json={"name": "New"}, headers=auth_headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Category updated successfully"
    mock_user_lookup.assert_awaited_once()
    mock_category_models.update_category.assert_awaited_once_with(1, name="New")


@pytest.mark.asyncio
async def test_update_without_changes(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.put("/categories/1", json={}, headers=auth_headers)

    assert res.status_code == 400
    assert res.json()["errors"][0]["error"] == "no_changes_provided"
    mock_category_models.update_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_blank_name(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.put("/categories/1", json={"name": "   "}, headers=auth_headers)

    assert res.status_code == 400
    assert res.json()["errors"][0]["error"] == "invalid_request_body"


@pytest.mark.asyncio
async def test_update_not_found(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    mock_category_models.update_category.return_value = None

    res = await client.put(
        "/categories/42", json={"description": "x"}, headers=auth_headers
    )

    assert res.status_code == 404
    assert res.json()["errors"][0]["error"] == "category_not_found"


# ==========================================
# 6. DELETE /categories/{id}
# ==========================================


@pytest.mark.asyncio
async def test_delete_requires_token(
    client: AsyncClient, mock_user_lookup, mock_category_models
):
    res = await client.delete("/categories/1")

    assert res.status_code == 401
    mock_user_lookup.assert_not_awaited()
    mock_category_models.delete_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_success(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    res = await client.delete("/categories/1", headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["message"] == "Category deleted successfully"
    assert data["body"]["id"] == 1
    mock_user_lookup.assert_awaited_once()
    mock_category_models.delete_category.assert_awaited_once_with(1)


@pytest.mark.asyncio
async def test_delete_not_found(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models
):
    mock_category_models.delete_category.return_value = None

    res = await client.delete("/categories/5", headers=auth_headers)

    assert res.status_code == 404


# ==========================================
# 7. 매칭되지 않는 메서드/경로
# ==========================================


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("PATCH", "/categories/1"),
        ("POST", "/categories/1"),
        ("DELETE", "/categories"),
        ("PUT", "/categories"),
    ],
)
async def test_undeclared_methods_not_allowed(
    client: AsyncClient, auth_headers, mock_user_lookup, mock_category_models, method, path
):
    res = await client.request(method, path, headers=auth_headers, json={})

    assert res.status_code == 405
    assert res.json()["code"] == 405
    assert "allow" in res.headers
    mock_user_lookup.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_sub_path(client: AsyncClient, auth_headers):
    res = await client.get("/categories/1/products", headers=auth_headers)

    assert res.status_code == 404
    assert res.json()["status"] is False
    assert res.json()["errors"][0]["error"] == "not_found"
