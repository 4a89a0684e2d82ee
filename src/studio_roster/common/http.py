"""Shared helpers for the JSON controllers.

Every route answers ``{"success": bool, ...}``; failures carry a ``message``
meant for the user.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, Optional

from flask import g, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from ..users.model import Actor

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu gửi lên không hợp lệ")
    return data


def handle_domain_errors(view):
    """Map domain exceptions to JSON error responses; anything else is a 500.

    Goes above the role decorators so failures while loading the actor are mapped too.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except tuple(err for err, _ in _STATUS_BY_ERROR) as e:
            status = next(code for err, code in _STATUS_BY_ERROR if isinstance(e, err))
            return json_error(str(e), status)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return json_error("Lỗi hệ thống, vui lòng thử lại", 500)

    return wrapper


def current_actor() -> Optional[Actor]:
    return g.get("actor")


def actor_required(container: "Container", *, manager: bool = False, admin: bool = False):
    """Decorator factory: resolve the logged-in Actor into ``g.actor`` and gate by role."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            account_id = session.get("account_id")
            if not account_id:
                return json_error("Vui lòng đăng nhập để tiếp tục!", 401)

            try:
                actor = container.auth_service.actor_for(account_id)
            except NotFoundError:
                session.clear()
                return json_error("Vui lòng đăng nhập để tiếp tục!", 401)

            if admin and not actor.is_admin:
                return json_error("Bạn không có quyền truy cập trang này", 403)
            if manager and not actor.can_manage:
                return json_error("Bạn không có quyền truy cập trang này", 403)

            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    return decorator


def iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
