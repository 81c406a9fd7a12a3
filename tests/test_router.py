"""Tests for perch.routing.router — ordered first-match-wins router."""

import inspect

import pytest

from perch.errors import ConfigurationError, MalformedPattern
from perch.routing.route import Route, RouteMatch, RouteNotFound
from perch.routing.router import Router


class Recorder:
    """Handler double that records every call it receives."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[object, dict[str, str]]] = []

    def __call__(self, context: object, params: dict[str, str]) -> str:
        self.calls.append((context, dict(params)))
        return self.name


def _compiled(*registrations: tuple[str, str, Recorder]) -> Router:
    router = Router()
    for method, path, handler in registrations:
        router.register(method, path, handler)
    router.compile()
    return router


class TestRegistration:
    def test_register_appends_in_order(self) -> None:
        r = Router()
        first, second = Recorder("first"), Recorder("second")
        r.register("GET", "/{id}", first)
        r.register("PUT", "/{id}", second)

        assert [(route.method, route.path) for route in r.routes] == [
            ("GET", "/{id}"),
            ("PUT", "/{id}"),
        ]

    def test_method_is_uppercased(self) -> None:
        r = Router()
        r.register("get", "/", Recorder("h"))
        assert r.routes[0].method == "GET"

    def test_convenience_methods(self) -> None:
        r = Router()
        h = Recorder("h")
        r.get("/a", h)
        r.post("/a", h)
        r.put("/a", h)
        r.patch("/a", h)
        r.delete("/a", h)
        assert [route.method for route in r.routes] == ["GET", "POST", "PUT", "PATCH", "DELETE"]

    def test_named_route(self) -> None:
        r = Router()
        r.get("/{id}", Recorder("h"), name="getUserById")
        assert r.routes[0].name == "getUserById"

    def test_unknown_method_rejected(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="Unsupported HTTP method 'FETCH'"):
            r.register("FETCH", "/", Recorder("h"))

    def test_malformed_pattern_rejected_at_registration(self) -> None:
        r = Router()
        with pytest.raises(MalformedPattern):
            r.register("GET", "/{id}/{id}", Recorder("h"))
        assert r.routes == []

    def test_overlapping_patterns_are_accepted(self) -> None:
        r = Router()
        r.get("/{id}", Recorder("a"))
        r.get("/{name}", Recorder("b"))
        r.get("/{id}", Recorder("c"))
        assert len(r.routes) == 3

    def test_add_prebuilt_route(self) -> None:
        r = Router()
        r.get("/{id}", Recorder("h"))
        route = r.routes[0]

        other = Router()
        other.add(route)
        assert other.routes == [route]

    def test_routes_returns_a_copy(self) -> None:
        r = Router()
        r.get("/", Recorder("h"))
        r.routes.clear()
        assert len(r.routes) == 1


class TestCompilation:
    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError, match="Cannot add routes after compilation"):
            r.get("/", Recorder("h"))

    def test_match_before_compile_raises(self) -> None:
        r = Router()
        r.get("/", Recorder("h"))
        with pytest.raises(RuntimeError, match="compiled before matching"):
            r.match("GET", "/")

    def test_compile_twice_is_safe(self) -> None:
        r = Router()
        r.get("/", Recorder("h"))
        r.compile()
        r.compile()
        assert r.compiled is True
        assert isinstance(r.match("GET", "/"), RouteMatch)


class TestMatching:
    def test_literal_route(self) -> None:
        r = _compiled(("GET", "/health", Recorder("h")))
        match = r.match("GET", "/health")
        assert isinstance(match, RouteMatch)
        assert match.params == {}

    def test_root_route(self) -> None:
        r = _compiled(("GET", "/", Recorder("h")))
        assert isinstance(r.match("GET", "/"), RouteMatch)

    def test_capture_values_are_literal_strings(self) -> None:
        r = _compiled(("GET", "/users/{user_id}/posts/{post_id}", Recorder("h")))
        match = r.match("GET", "/users/alice/posts/007")
        assert isinstance(match, RouteMatch)
        assert match.params == {"user_id": "alice", "post_id": "007"}
        assert list(match.params) == ["user_id", "post_id"]

    def test_colon_captures_match_like_brace_captures(self) -> None:
        r = _compiled(("GET", "/login/:id", Recorder("h")))
        match = r.match("GET", "/login/42")
        assert isinstance(match, RouteMatch)
        assert match.params == {"id": "42"}

    def test_method_is_case_insensitive(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        assert isinstance(r.match("get", "/42"), RouteMatch)

    def test_wrong_method_is_not_found(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        assert r.match("DELETE", "/42") == RouteNotFound("DELETE", "/42")

    def test_segment_count_must_agree(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        assert isinstance(r.match("GET", "/a/b"), RouteNotFound)

    def test_root_does_not_match_single_capture(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        assert isinstance(r.match("GET", "/"), RouteNotFound)

    def test_trailing_slash_is_distinct(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        assert isinstance(r.match("GET", "/42/"), RouteNotFound)

    def test_trailing_slash_pattern_matches_only_trailing_slash(self) -> None:
        r = _compiled(("GET", "/users/", Recorder("h")))
        assert isinstance(r.match("GET", "/users/"), RouteMatch)
        assert isinstance(r.match("GET", "/users"), RouteNotFound)

    def test_empty_segment_never_captured(self) -> None:
        r = _compiled(("GET", "/{a}/{b}", Recorder("h")))
        assert isinstance(r.match("GET", "//42"), RouteNotFound)


class TestPrecedence:
    def test_first_registered_wins(self) -> None:
        first, second = Recorder("first"), Recorder("second")
        r = _compiled(("GET", "/{id}", first), ("GET", "/{name}", second))

        match = r.match("GET", "/42")
        assert isinstance(match, RouteMatch)
        assert match.route.handler is first

    def test_capture_registered_before_literal_shadows_it(self) -> None:
        capture, literal = Recorder("capture"), Recorder("literal")
        r = _compiled(("GET", "/{id}", capture), ("GET", "/me", literal))

        match = r.match("GET", "/me")
        assert isinstance(match, RouteMatch)
        assert match.route.handler is capture
        assert match.params == {"id": "me"}

    def test_literal_registered_first_wins(self) -> None:
        literal, capture = Recorder("literal"), Recorder("capture")
        r = _compiled(("GET", "/me", literal), ("GET", "/{id}", capture))

        me = r.match("GET", "/me")
        other = r.match("GET", "/42")
        assert isinstance(me, RouteMatch)
        assert isinstance(other, RouteMatch)
        assert me.route.handler is literal
        assert other.route.handler is capture

    def test_other_methods_do_not_affect_order(self) -> None:
        put, get = Recorder("put"), Recorder("get")
        r = _compiled(("PUT", "/{id}", put), ("GET", "/{id}", get))

        match = r.match("GET", "/42")
        assert isinstance(match, RouteMatch)
        assert match.route.handler is get


class TestDispatch:
    def test_invokes_handler_with_context_and_params(self) -> None:
        handler = Recorder("h")
        r = _compiled(("GET", "/{id}", handler))
        context = object()

        assert r.dispatch("GET", "/42", context) == "h"
        assert handler.calls == [(context, {"id": "42"})]

    def test_not_found_invokes_nothing(self) -> None:
        handler = Recorder("h")
        r = _compiled(("GET", "/{id}", handler))

        result = r.dispatch("DELETE", "/42", object())
        assert isinstance(result, RouteNotFound)
        assert handler.calls == []

    def test_handler_invoked_exactly_once(self) -> None:
        handler = Recorder("h")
        r = _compiled(("GET", "/{id}", handler))
        r.dispatch("GET", "/1", None)
        assert len(handler.calls) == 1

    def test_handler_errors_propagate(self) -> None:
        def broken(context, params):
            raise ValueError("boom")

        r = Router()
        r.get("/{id}", broken)
        r.compile()

        with pytest.raises(ValueError, match="boom"):
            r.dispatch("GET", "/1", None)

    def test_async_handler_result_is_returned_unawaited(self) -> None:
        async def handler(context, params):
            return params["id"]

        r = Router()
        r.get("/{id}", handler)
        r.compile()

        result = r.dispatch("GET", "/9", None)
        assert inspect.iscoroutine(result)
        result.close()

    def test_return_value_is_passed_through_untouched(self) -> None:
        sentinel = object()
        r = Router()
        r.get("/", lambda context, params: sentinel)
        r.compile()
        assert r.dispatch("GET", "/", None) is sentinel

    def test_dispatch_is_idempotent(self) -> None:
        handler = Recorder("h")
        r = _compiled(("GET", "/login/{id}", handler))

        first = r.match("GET", "/login/42")
        second = r.match("GET", "/login/42")
        assert first == second

        r.dispatch("GET", "/login/42", None)
        r.dispatch("GET", "/login/42", None)
        assert handler.calls[0] == handler.calls[1]

    def test_params_are_fresh_per_match(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        first = r.match("GET", "/1")
        second = r.match("GET", "/1")
        assert isinstance(first, RouteMatch)
        assert isinstance(second, RouteMatch)
        first.params["id"] = "changed"
        assert second.params == {"id": "1"}

    def test_route_identity_is_stable(self) -> None:
        r = _compiled(("GET", "/{id}", Recorder("h")))
        match = r.match("GET", "/1")
        assert isinstance(match, RouteMatch)
        assert isinstance(match.route, Route)
        assert match.route is r.routes[0]
