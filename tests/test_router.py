"""Tests for tern.routing.router — interceptor chain and route dispatch."""

import pytest

from tern.config import RouterConfig
from tern.errors import InvalidPatternError, RouterFrozenError
from tern.http.request import Request, RequestView
from tern.http.response import ResponseWriter
from tern.routing.route import DECLINE, HANDLED, Outcome
from tern.routing.router import Router
from tern.testing import route_request


class TestRegistration:
    def test_handle_decorator_returns_function(self) -> None:
        router = Router()

        @router.handle("/users/:id")
        def show(sink, request):
            return HANDLED

        assert show.__name__ == "show"
        assert router.lookup("/users/:id/") == (show, True)

    def test_list_patterns_in_dispatch_order(self) -> None:
        router = Router()
        router.register("*", lambda s, r: None)
        router.register("/a/*", lambda s, r: None)
        router.register("/a/b", lambda s, r: None)
        assert router.list_patterns() == ("/a/b/", "/a/*/", "*")

    def test_latest_registration_wins(self) -> None:
        router = Router()

        def old(sink, request):
            sink.write("old")

        def new(sink, request):
            sink.write("new")

        router.register("/x", old)
        router.register("/x", new)

        assert router.lookup("/x") == (new, True)
        assert router.list_patterns() == ("/x/",)
        _, writer = route_request(router, "/x")
        assert writer.body == b"new"

    def test_strict_patterns_from_config(self) -> None:
        with pytest.raises(InvalidPatternError):
            Router().register("/a//b", lambda s, r: None)
        lenient = Router(RouterConfig(strict_patterns=False))
        lenient.register("/a//b", lambda s, r: None)
        assert lenient.list_patterns() == ("/a//b/",)

    def test_lenient_non_final_star_is_a_literal_route(self) -> None:
        router = Router(RouterConfig(strict_patterns=False))
        router.register("/a/:x/b", lambda s, r: s.write("capture"))
        router.register("/a/*/b", lambda s, r: s.write("literal"))

        assert router.list_patterns() == ("/a/*/b/", "/a/:x/b/")
        assert [m.route.pattern for m in router.match("/a/*/b")] == ["/a/*/b/", "/a/:x/b/"]
        _, writer = route_request(router, "/a/*/b")
        assert writer.body == b"literal"
        _, writer = route_request(router, "/a/z/b")
        assert writer.body == b"capture"

    def test_interceptor_decorator(self) -> None:
        router = Router()

        @router.register_interceptor
        def auth(sink, request):
            return DECLINE

        assert router.interceptors == (auth,)

    def test_freeze(self) -> None:
        router = Router()
        router.register("/a", lambda s, r: None)
        router.freeze()
        with pytest.raises(RouterFrozenError):
            router.register("/b", lambda s, r: None)
        with pytest.raises(RouterFrozenError):
            router.register_interceptor(lambda s, r: DECLINE)
        handled, _ = route_request(router, "/a")
        assert handled is True


class TestDispatch:
    def test_params_reach_handler(self) -> None:
        router = Router()
        seen: list[RequestView] = []

        @router.handle("/users/:user/posts/:post")
        def post(sink, request):
            seen.append(request)
            sink.write(f"{request.param('user')}:{request.param('post')}")

        handled, writer = route_request(router, "/users/alice/posts/42")

        assert handled is True
        assert writer.body == b"alice:42"
        assert dict(seen[0].params) == {"user": "alice", "post": "42"}
        assert seen[0].path == "/users/alice/posts/42"

    def test_params_are_read_only(self) -> None:
        router = Router()
        views: list[RequestView] = []
        router.register("/a/:x", lambda s, r: views.append(r))
        route_request(router, "/a/b")
        with pytest.raises(TypeError):
            views[0].params["x"] = "changed"  # type: ignore[index]

    def test_specific_route_wins_regardless_of_registration_order(self) -> None:
        router = Router()
        calls: list[str] = []
        router.register("/a/*", lambda s, r: calls.append("wildcard"))
        router.register("/a/b/", lambda s, r: calls.append("literal"))

        route_request(router, "/a/b/")

        assert calls == ["literal"]

    def test_decline_moves_to_next_match(self) -> None:
        router = Router()
        calls: list[str] = []

        @router.handle("/a/b")
        def specific(sink, request):
            calls.append("specific")
            return DECLINE

        @router.handle("/a/:x")
        def general(sink, request):
            calls.append(f"general:{request.param('x')}")

        handled, _ = route_request(router, "/a/b")

        assert handled is True
        assert calls == ["specific", "general:b"]

    def test_handled_stops_dispatch(self) -> None:
        router = Router()
        calls: list[str] = []
        router.register("/a/b", lambda s, r: calls.append("first") or HANDLED)
        router.register("/a/:x", lambda s, r: calls.append("second"))

        route_request(router, "/a/b")

        assert calls == ["first"]

    def test_each_match_gets_its_own_params(self) -> None:
        router = Router()
        seen: list[dict[str, str]] = []

        def record(sink, request):
            seen.append(dict(request.params))
            return DECLINE

        router.register("/files/:name", record)
        router.register("/files/*", record)
        router.register("*", record)

        handled, _ = route_request(router, "/files/readme")

        assert handled is False
        assert seen == [{"name": "readme"}, {"*": "readme"}, {}]

    def test_no_match_is_unhandled(self) -> None:
        router = Router()
        router.register("/a", lambda s, r: None)
        handled, writer = route_request(router, "/b")
        assert handled is False
        assert writer.written is False

    def test_all_declined_is_unhandled(self) -> None:
        router = Router()
        router.register("/a", lambda s, r: DECLINE)
        router.register("*", lambda s, r: DECLINE)
        handled, writer = route_request(router, "/a")
        assert handled is False
        assert writer.written is False

    def test_wildcard_token_as_fallback(self) -> None:
        router = Router()
        router.register("/a", lambda s, r: s.write("a"))

        @router.handle("*")
        def not_found(sink, request):
            sink.set_status(404)

        _, writer = route_request(router, "/nowhere")
        assert writer.status == 404

    def test_bad_return_value(self) -> None:
        router = Router()

        def broken(sink, request):
            return "done"

        router.register("/a", broken)
        with pytest.raises(TypeError, match="broken returned str"):
            route_request(router, "/a")

    def test_handler_errors_propagate(self) -> None:
        router = Router()

        def explode(sink, request):
            raise RuntimeError("boom")

        router.register("/a", explode)
        with pytest.raises(RuntimeError, match="boom"):
            route_request(router, "/a")

    def test_route_with_explicit_request(self) -> None:
        router = Router()
        router.register("/a/:x", lambda s, r: s.write(r.handle))
        writer = ResponseWriter()
        assert router.route(writer, Request("/a/1", handle="transport-id")) is True
        assert writer.body == b"transport-id"


class TestInterceptors:
    def test_run_in_registration_order_before_routes(self) -> None:
        router = Router()
        calls: list[str] = []
        router.register_interceptor(lambda s, r: calls.append("first") or DECLINE)
        router.register_interceptor(lambda s, r: calls.append("second") or DECLINE)
        router.register("*", lambda s, r: calls.append("route"))

        handled, _ = route_request(router, "/x")

        assert handled is True
        assert calls == ["first", "second", "route"]

    def test_halting_interceptor_blocks_all_routes(self) -> None:
        router = Router()
        calls: list[str] = []

        @router.register_interceptor
        def gate(sink, request):
            calls.append("gate")
            sink.set_status(401)
            return HANDLED

        router.register_interceptor(lambda s, r: calls.append("never") or DECLINE)
        router.register("*", lambda s, r: calls.append("route"))

        handled, writer = route_request(router, "/x")

        assert handled is True
        assert calls == ["gate"]
        assert writer.status == 401

    def test_none_counts_as_handled(self) -> None:
        router = Router()
        calls: list[str] = []
        router.register_interceptor(lambda s, r: calls.append("silent"))
        router.register("*", lambda s, r: calls.append("route"))

        route_request(router, "/x")

        assert calls == ["silent"]

    def test_interceptor_sees_bare_request(self) -> None:
        router = Router()
        seen: list[object] = []
        router.register_interceptor(lambda s, r: seen.append(r) or Outcome.DECLINE)

        route_request(router, "/x", headers={"X-Token": "abc"})

        assert isinstance(seen[0], Request)
        assert seen[0].headers["x-token"] == "abc"

    def test_intercept_reports_pass_through(self) -> None:
        router = Router()
        router.register_interceptor(lambda s, r: DECLINE)
        assert router.intercept(ResponseWriter(), Request("/")) is True


class TestMatch:
    def test_lists_every_match_in_order(self) -> None:
        router = Router()
        router.register("*", lambda s, r: None)
        router.register("/a/:x", lambda s, r: None)
        router.register("/a/b", lambda s, r: None)
        router.register("/c", lambda s, r: None)

        matches = router.match("/a/b")

        assert [m.route.pattern for m in matches] == ["/a/b/", "/a/:x/", "*"]
        assert dict(matches[1].params) == {"x": "b"}

    def test_runs_no_handlers(self) -> None:
        router = Router()
        calls: list[str] = []
        router.register("/a", lambda s, r: calls.append("ran"))
        assert len(router.match("/a")) == 1
        assert calls == []
