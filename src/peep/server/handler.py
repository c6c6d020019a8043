"""ASGI handler: translates ASGI scope/messages to peep types.

The only component that touches raw ASGI directly. Builds the Request,
matches it against the route table, installs the RequestContext the
keywords read from, calls the handler, and sends the Response back
through ASGI send().
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from contextvars import Token
from typing import TYPE_CHECKING, Any

from peep._internal.asgi import Receive, Scope, Send
from peep._internal.invoke import invoke
from peep.context import RequestContext, context_var
from peep.errors import HTTPError
from peep.http.request import Request
from peep.http.response import Response, ResponseHandle
from peep.routing.destinations import Destinations
from peep.routing.route import RouteMatch
from peep.routing.router import Router
from peep.server.errors import handle_http_error, handle_internal_error
from peep.server.negotiation import negotiate
from peep.server.sender import encode_response

if TYPE_CHECKING:
    from peep.app import App

_NO_BODY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    app: App,
    router: Router,
    destinations: Destinations,
    renderer: Callable[[str, Any], str] | None,
    debug: bool,
    max_body: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, max_body=max_body)

    try:
        match = router.match(request.method, request.path)
        response = await _dispatch(
            match,
            request,
            app=app,
            destinations=destinations,
            renderer=renderer,
        )
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    head = request.method == "HEAD"
    try:
        messages = encode_response(response, head=head)
    except UnicodeEncodeError as exc:
        messages = encode_response(handle_internal_error(exc, request, debug), head=head)

    for message in messages:
        await send(message)


async def _dispatch(
    match: RouteMatch,
    request: Request,
    *,
    app: App,
    destinations: Destinations,
    renderer: Callable[[str, Any], str] | None,
) -> Response:
    """Resolve the destination, run it inside a RequestContext, negotiate."""
    destination = match.route.destination
    handler = destinations.resolve(destination) if isinstance(destination, str) else destination

    params = request.query
    if request.method not in _NO_BODY_METHODS:
        params = params.merged(await request.body_params())

    ctx = RequestContext(
        app,
        request,
        named=match.named,
        params=params,
        response=ResponseHandle(renderer),
    )
    token: Token[RequestContext] = context_var.set(ctx)
    try:
        kwargs = _build_handler_kwargs(handler, ctx)
        result = await invoke(handler, **kwargs)
        return negotiate(result, ctx.response)
    finally:
        context_var.reset(token)


def _build_handler_kwargs(handler: Callable[..., Any], ctx: RequestContext) -> dict[str, Any]:
    """Inspect the handler signature and fill in what it asks for.

    Resolution order:
    1. ``app``: the application instance
    2. ``request`` (by name or ``Request`` annotation)
    3. Named placeholders (by name, converted to the annotated type)

    Handlers that take no parameters get nothing.
    """
    try:
        sig = inspect.signature(handler, eval_str=True)
    except (TypeError, ValueError):
        return {}

    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.POSITIONAL_ONLY):
            continue
        if param.kind is param.VAR_KEYWORD:
            for key, value in ctx.named.items():
                kwargs.setdefault(key, value)
            continue
        if name == "app":
            kwargs[name] = ctx.app
        elif name == "request" or param.annotation is Request:
            kwargs[name] = ctx.request
        elif name in ctx.named:
            value = ctx.named[name]
            if param.annotation is not inspect.Parameter.empty and param.annotation is not str:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value
    return kwargs
