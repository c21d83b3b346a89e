"""
Safe routes: authentication, input validation and error translation in one
request pipeline.

Usage:
    @bookmarks_bp.route('/api/b')
    @user_route.query(UrlQuery).handler
    def save_from_url(request, args):
        ...  # args.query.url is validated, args.ctx.user is signed in

A request runs the middleware chain first (authentication), then validates
path params, query string and JSON body against the declared schemas. The
handler only runs when every step passed; otherwise the request ends with an
Unauthorized/Forbidden or InvalidInput error response.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type
import logging

import redis
from flask import jsonify, request
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers import Response

from saveit.database.models import ApiKey, User
from saveit.decorators.auth import require_api_key, require_user
from saveit.exceptions import (
    ApplicationError, InvalidInput, SafeRouteError, StoreUnavailable
)
from saveit.utils.response_helpers import (
    error_response,
    server_error_response,
    service_unavailable_response,
    validation_error_response,
)
from saveit.validation import validate_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteContext:
    """Per-request context built by the middleware chain."""
    user: Optional[User] = None
    api_key: Optional[ApiKey] = None


@dataclass(frozen=True)
class HandlerArgs:
    """Validated inputs handed to a safe-route handler."""
    params: Optional[BaseModel]
    query: Optional[BaseModel]
    body: Optional[BaseModel]
    ctx: RouteContext


def handle_server_error(error: Exception):
    """Translate an exception raised in a safe route into a response."""
    if isinstance(error, HTTPException):
        raise error

    if isinstance(error, InvalidInput):
        return validation_error_response(error.issues)

    if isinstance(error, SafeRouteError):
        return error_response(error.message, status=error.status, error_code=error.error_code)

    if isinstance(error, ApplicationError):
        return error_response(error.message, status=400, error_code=error.error_type)

    if isinstance(error, (StoreUnavailable, SQLAlchemyError, redis.RedisError)):
        logger.error(f"Store unavailable while handling {request.path}: {error}")
        return service_unavailable_response()

    logger.exception(f"Unexpected error while handling {request.path}")
    return server_error_response()


def to_response(result: Any):
    """
    Convert a handler's return value into something Flask can send.

    Responses (including redirects) and (body, status) tuples pass through,
    pydantic models are dumped to JSON, None becomes 204.
    """
    if isinstance(result, (Response, tuple)):
        return result
    if result is None:
        return '', 204
    if isinstance(result, BaseModel):
        return jsonify(result.model_dump(mode='json', by_alias=True))
    return jsonify(result)


class RouteClient:
    """
    Immutable builder for safe routes.

    Every method returns a new client, so partially configured clients
    (user_route, api_route) can be shared between modules.
    """

    def __init__(
        self,
        middlewares: Tuple[Callable, ...] = (),
        params_schema: Optional[Type[BaseModel]] = None,
        query_schema: Optional[Type[BaseModel]] = None,
        body_schema: Optional[Type[BaseModel]] = None,
        error_handler: Callable[[Exception], Any] = handle_server_error
    ):
        self.middlewares = tuple(middlewares)
        self.params_schema = params_schema
        self.query_schema = query_schema
        self.body_schema = body_schema
        self.error_handler = error_handler

    def _replace(self, **changes) -> 'RouteClient':
        options = {
            'middlewares': self.middlewares,
            'params_schema': self.params_schema,
            'query_schema': self.query_schema,
            'body_schema': self.body_schema,
            'error_handler': self.error_handler,
        }
        options.update(changes)
        return RouteClient(**options)

    def use(self, middleware: Callable) -> 'RouteClient':
        return self._replace(middlewares=self.middlewares + (middleware,))

    def params(self, schema: Type[BaseModel]) -> 'RouteClient':
        return self._replace(params_schema=schema)

    def query(self, schema: Type[BaseModel]) -> 'RouteClient':
        return self._replace(query_schema=schema)

    def body(self, schema: Type[BaseModel]) -> 'RouteClient':
        return self._replace(body_schema=schema)

    def handler(self, fn: Callable[[Any, HandlerArgs], Any]) -> Callable:
        """Wrap fn into a Flask view function running the full pipeline."""
        client = self

        @wraps(fn)
        def view(**path_params):
            try:
                return client._dispatch(fn, path_params)
            except Exception as e:
                return client.error_handler(e)

        return view

    def _dispatch(self, fn, path_params):
        ctx = {}
        for middleware in self.middlewares:
            ctx.update(middleware(request, dict(ctx)) or {})

        validated = {}
        issues = []
        for source, schema, load in (
            ('params', self.params_schema, lambda: dict(path_params)),
            ('query', self.query_schema, lambda: request.args.to_dict()),
            ('body', self.body_schema, lambda: request.get_json(silent=True)),
        ):
            if schema is None:
                validated[source] = None
                continue
            result = validate_input(schema, load(), source)
            validated[source] = result.value
            issues.extend(result.issues)

        if issues:
            logger.info(f"Rejected invalid input for {request.path}: {issues}")
            raise InvalidInput(issues)

        args = HandlerArgs(ctx=RouteContext(**ctx), **validated)
        return to_response(fn(request, args))


route_client = RouteClient()

user_route = route_client.use(require_user)

api_route = route_client.use(require_api_key)
