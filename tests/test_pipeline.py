import asyncio
import itertools
import logging

import pytest
from graphql import build_schema

from conftest import Recorder, TOKEN
from hookgraph.core.errors import (
    ContextBuildError,
    ParseError,
    ResolverError,
    UnauthorizedError,
    ValidationError,
)
from hookgraph.core.hooks import ExecutionArgs, HookResult, Plugin, coerce_hook_result
from hookgraph.core.query_types import GraphQLRequest
from hookgraph.runtime.context import TransportInput
from hookgraph.runtime.pipeline import build_pipeline


@pytest.mark.parametrize("order", list(itertools.permutations(["a", "b", "c"])))
async def test_before_hooks_in_order_after_hooks_reversed(order, schema, root_value):
    events = []
    plugins = [Recorder(label, events) for label in order]
    pipeline = build_pipeline(plugins, schema=schema, root_value=root_value)

    result = await pipeline.run_query("{ hello }")

    assert result.formatted() == {"data": {"hello": "Hello from Envelop!"}}
    assert [e for e in events if e[0] == "context"] == [("context", label) for label in order]
    assert [e for e in events if e[0] == "before"] == [("before", label) for label in order]
    assert [e for e in events if e[0] == "after"] == [("after", label) for label in reversed(order)]


async def test_abort_skips_resolvers_and_collected_after_hooks(events, counting_schema):
    schema, root, calls = counting_schema
    plugins = [
        Recorder("first", events),
        Recorder("gate", events, abort_with=UnauthorizedError()),
        Recorder("never", events),
    ]
    pipeline = build_pipeline(plugins, schema=schema, root_value=root)

    result = await pipeline.run_query("{ ping }")

    assert calls["count"] == 0
    assert result.formatted() == {"errors": [{"message": "Unauthorized"}]}
    assert result.status_code == 401
    assert ("before", "never") not in events
    assert not [e for e in events if e[0] == "after"]


async def test_raising_before_hook_aborts_like_explicit_abort(counting_schema):
    schema, root, calls = counting_schema

    class Exploding(Plugin):
        def on_execute(self, args):
            raise RuntimeError("boom")

    pipeline = build_pipeline([Exploding()], schema=schema, root_value=root)
    result = await pipeline.run_query("{ ping }")

    assert calls["count"] == 0
    assert result.formatted() == {"errors": [{"message": "boom"}]}
    assert result.status_code == 500


async def test_after_hook_failure_is_isolated(events, schema, root_value, caplog):
    caplog.set_level(logging.ERROR, logger="hookgraph.runtime.pipeline")
    plugins = [Recorder("outer", events), Recorder("broken", events, fail_after=True)]
    pipeline = build_pipeline(plugins, schema=schema, root_value=root_value)

    result = await pipeline.run_query("{ hello }")

    assert result.formatted() == {"data": {"hello": "Hello from Envelop!"}}
    # The failing hook runs first (LIFO) and the outer one still runs
    assert [e for e in events if e[0] == "after"] == [("after", "broken"), ("after", "outer")]
    assert any("broken.on_execute_done failed" in r.getMessage() for r in caplog.records)


async def test_context_hooks_share_context_and_fail_fast(events, schema, root_value):
    seen = {}

    class Writer(Plugin):
        def on_context_building(self, context, transport):
            context.extras["tenant"] = "acme"

    class Reader(Plugin):
        def on_context_building(self, context, transport):
            seen["tenant"] = context.extras.get("tenant")

    pipeline = build_pipeline([Writer(), Reader()], schema=schema, root_value=root_value)
    await pipeline.build_context(TransportInput())
    assert seen == {"tenant": "acme"}

    failing = build_pipeline(
        [Recorder("bad", events, raise_in_context=ValueError("no")), Recorder("later", events)],
        schema=schema,
        root_value=root_value,
    )
    with pytest.raises(ContextBuildError):
        await failing.build_context(TransportInput())
    assert events == [("context", "bad")]

    result = await failing.run_query("{ hello }")
    assert isinstance(result.error, ContextBuildError)
    assert result.status_code == 500
    assert "data" not in result.formatted()
    assert not [e for e in events if e[0] == "before"]


async def test_context_is_fresh_per_request(schema, root_value):
    contexts = []

    class Capture(Plugin):
        def on_execute(self, args):
            contexts.append(args.context_value)

    pipeline = build_pipeline([Capture()], schema=schema, root_value=root_value)
    await pipeline.run_query("{ hello }")
    await pipeline.run_query("{ hello }")

    assert len(contexts) == 2
    assert contexts[0] is not contexts[1]


async def test_interleaved_requests_never_share_context(schema, root_value):
    class TagRequest(Plugin):
        async def on_context_building(self, context, transport):
            context.extras["request_id"] = transport.header("x-request-id")
            await asyncio.sleep(0)
            context.extras["seen_after_yield"] = context.extras["request_id"]

    seen = []

    class Capture(Plugin):
        async def on_execute(self, args):
            await asyncio.sleep(0)
            seen.append((args.context_value.transport.header("x-request-id"), dict(args.context_value.extras)))

    pipeline = build_pipeline([TagRequest(), Capture()], schema=schema, root_value=root_value)
    ids = [str(i) for i in range(10)]

    results = await asyncio.gather(*(pipeline.run_query("{ hello }", headers={"X-Request-Id": i}) for i in ids))

    assert all(not r.has_errors for r in results)
    assert sorted(request_id for request_id, _ in seen) == sorted(ids)
    for request_id, extras in seen:
        assert extras == {"request_id": request_id, "seen_after_yield": request_id}


async def test_parse_error_stops_after_context_building(events, schema, root_value):
    pipeline = build_pipeline([Recorder("only", events)], schema=schema, root_value=root_value)

    result = await pipeline.run_query("{ hello ")

    assert isinstance(result.error, ParseError)
    assert result.status_code == 400
    body = result.formatted()
    assert list(body) == ["errors"]
    assert body["errors"][0]["message"].startswith("Syntax Error")
    assert events == [("context", "only")]


async def test_validation_error_is_terminal(events, schema, root_value, engine):
    pipeline = build_pipeline([Recorder("r", events)], schema=schema, root_value=root_value, engine=engine)

    result = await pipeline.run_query("{ nope }")

    assert isinstance(result.error, ValidationError)
    assert "Cannot query field 'nope'" in result.errors[0]["message"]
    assert engine.executions == 0
    assert ("before", "r") not in events


async def test_async_hooks_are_awaited(schema, root_value):
    events = []

    class AsyncPlugin(Plugin):
        async def on_context_building(self, context, transport):
            events.append("context")

        async def on_execute(self, args):
            events.append("before")

            async def on_execute_done(result):
                events.append("after")

            return HookResult.proceed(on_execute_done)

    pipeline = build_pipeline([AsyncPlugin()], schema=schema, root_value=root_value)
    result = await pipeline.run_query("{ hello }")

    assert not result.has_errors
    assert events == ["context", "before", "after"]


async def test_variables_and_operation_name_reach_engine(schema, root_value):
    pipeline = build_pipeline([], schema=schema, root_value=root_value)
    query = """
        query First { hello }
        query GetUser($id: ID!) { user(id: $id) { name email } }
    """

    result = await pipeline.run(
        GraphQLRequest(query=query, variables={"id": "3"}, operationName="GetUser"),
        TransportInput(),
    )

    assert result.formatted() == {"data": {"user": {"name": "Carol", "email": "carol@example.com"}}}


async def test_resolver_error_yields_partial_data():
    schema = build_schema("type Query { ok: String, bad: String }")

    def bad(info):
        raise ResolverError("resolver failed")

    pipeline = build_pipeline([], schema=schema, root_value={"ok": lambda info: "yes", "bad": bad})
    result = await pipeline.run_query("{ ok bad }")

    body = result.formatted()
    assert result.status_code == 200
    assert body["data"] == {"ok": "yes", "bad": None}
    assert body["errors"][0]["message"] == "resolver failed"
    assert body["errors"][0]["path"] == ["bad"]


async def test_mutation_echoes_message(schema, root_value):
    pipeline = build_pipeline([], schema=schema, root_value=root_value)

    result = await pipeline.run_query('mutation { sendMessage(message: "hi") { message timestamp } }')

    payload = result.data["sendMessage"]
    assert payload["message"] == "hi"
    assert payload["timestamp"].endswith("Z")


async def test_unexpected_engine_failure_is_normalized(schema, root_value, engine):
    async def broken_execute(args):
        raise RuntimeError("engine down")

    engine.execute = broken_execute
    pipeline = build_pipeline([], schema=schema, root_value=root_value, engine=engine)

    result = await pipeline.run_query("{ hello }")

    assert result.formatted() == {"errors": [{"message": "engine down"}]}
    assert result.status_code == 500


def test_coerce_hook_result():
    def done(result):
        return None

    assert not coerce_hook_result(None).aborted
    assert coerce_hook_result(done).on_done is done
    aborted = coerce_hook_result(HookResult.abort(UnauthorizedError()))
    assert aborted.aborted
    with pytest.raises(TypeError):
        coerce_hook_result(42)


def test_execution_args_are_immutable(schema):
    from graphql import parse
    from hookgraph.runtime.context import RequestContext

    args = ExecutionArgs(schema=schema, document=parse("{ hello }"), context_value=RequestContext(TransportInput()))
    with pytest.raises(Exception):
        args.operation_name = "changed"


def test_transport_headers_are_case_insensitive():
    transport = TransportInput(headers={"Authorization": TOKEN})
    assert transport.header("authorization") == TOKEN
    assert transport.header("AUTHORIZATION") == TOKEN
    assert transport.header("x-missing") is None
