import asyncio
import inspect

import pytest
from graphql import build_schema

from hookgraph.core.hooks import HookResult, Plugin
from hookgraph.demo import build_demo_schema, build_root_value
from hookgraph.runtime.engine import GraphQLEngine

TOKEN = "Bearer secret-token"


def pytest_pyfunc_call(pyfuncitem):
    """Allow running async tests without pytest-asyncio.

    If the test function is a coroutine, run it in a fresh event loop.
    """
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        funcargs = pyfuncitem.funcargs
        sig = inspect.signature(testfunction)
        allowed = {name: funcargs[name] for name in sig.parameters.keys() if name in funcargs}
        asyncio.run(testfunction(**allowed))
        return True
    return None


class Recorder(Plugin):
    """Plugin that appends every hook call to a shared event list."""

    def __init__(self, label, events, abort_with=None, raise_in_context=None, fail_after=False):
        self.name = label
        self.events = events
        self.abort_with = abort_with
        self.raise_in_context = raise_in_context
        self.fail_after = fail_after

    def on_context_building(self, context, transport):
        self.events.append(("context", self.name))
        if self.raise_in_context is not None:
            raise self.raise_in_context

    def on_execute(self, args):
        self.events.append(("before", self.name))
        if self.abort_with is not None:
            return HookResult.abort(self.abort_with)

        def on_execute_done(result):
            self.events.append(("after", self.name))
            if self.fail_after:
                raise RuntimeError(f"{self.name} after-hook exploded")

        return on_execute_done


class CountingEngine(GraphQLEngine):
    """Engine that counts validation and execution calls."""

    def __init__(self):
        self.validations = 0
        self.executions = 0

    def validate(self, schema, document):
        self.validations += 1
        return super().validate(schema, document)

    async def execute(self, args):
        self.executions += 1
        return await super().execute(args)


@pytest.fixture
def events():
    return []


@pytest.fixture
def schema():
    return build_demo_schema()


@pytest.fixture
def root_value():
    return build_root_value()


@pytest.fixture
def engine():
    return CountingEngine()


@pytest.fixture
def counting_schema():
    """Schema whose resolvers count how often they run."""
    calls = {"count": 0}
    schema = build_schema("type Query { ping: String! }")

    def ping(info):
        calls["count"] += 1
        return "pong"

    return schema, {"ping": ping}, calls
