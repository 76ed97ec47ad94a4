import logging

import pytest
from fastapi.testclient import TestClient

from conftest import TOKEN
from hookgraph.config import HookgraphConfig
from hookgraph.server import GraphQLServer, default_plugins
from hookgraph.plugins import AuthPlugin, LoggingPlugin, TimingPlugin, ValidationCachePlugin

AUTH = {"Authorization": TOKEN}


@pytest.fixture
def client():
    return TestClient(GraphQLServer().app)


def test_scenario_a_hello(client):
    r = client.post("/graphql", json={"query": "{ hello }"}, headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"data": {"hello": "Hello from Envelop!"}}


def test_scenario_b_user_by_id(client):
    r = client.post("/graphql", json={"query": '{ user(id:"2"){ name } }'}, headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"data": {"user": {"name": "Bob"}}}


def test_scenario_c_unknown_user_is_null(client):
    r = client.post("/graphql", json={"query": '{ user(id:"9"){ name } }'}, headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"data": {"user": None}}


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": ""}])
def test_scenario_d_unauthorized(headers, client, caplog):
    caplog.set_level(logging.INFO, logger="hookgraph")

    r = client.post("/graphql", json={"query": "{ hello }"}, headers=headers)

    assert r.status_code == 401
    assert r.json() == {"errors": [{"message": "Unauthorized"}]}
    emitted = {getattr(rec, "event", None) for rec in caplog.records}
    assert "graphql.success" not in emitted
    assert "graphql.timing" not in emitted


def test_scenario_e_malformed_query(client, caplog):
    caplog.set_level(logging.INFO, logger="hookgraph")

    r = client.post("/graphql", json={"query": "{ hello "}, headers=AUTH)

    assert r.status_code == 400
    body = r.json()
    assert list(body) == ["errors"]
    assert "Syntax Error" in body["errors"][0]["message"]
    emitted = {getattr(rec, "event", None) for rec in caplog.records}
    assert "graphql.request" not in emitted


def test_users_list_and_variables(client):
    r = client.post(
        "/graphql",
        json={
            "query": "query One($id: ID!) { user(id: $id) { id email } } query All { users { name } }",
            "variables": {"id": "1"},
            "operationName": "All",
        },
        headers=AUTH,
    )
    assert r.json() == {"data": {"users": [{"name": "Alice"}, {"name": "Bob"}, {"name": "Carol"}]}}


def test_validation_error_status(client):
    r = client.post("/graphql", json={"query": "{ hello { nested } }"}, headers=AUTH)
    assert r.status_code == 400
    assert "errors" in r.json()
    assert "data" not in r.json()


def test_invalid_json_body(client):
    r = client.post("/graphql", content=b"{not json", headers={"Content-Type": "application/json", **AUTH})
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"].startswith("Request body is not valid JSON")


def test_missing_query_field(client):
    r = client.post("/graphql", json={"variables": {}}, headers=AUTH)
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"].startswith("Invalid GraphQL request")


def test_health_and_unknown_route(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/nope").status_code == 404


def test_playground_page(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "graphiql" in r.text
    assert '"/graphql"' in r.text


def test_playground_can_be_disabled():
    config = HookgraphConfig()
    config.playground.enabled = False
    client = TestClient(GraphQLServer(config).app)
    assert client.get("/").status_code == 404


def test_playground_embeds_configured_headers():
    config = HookgraphConfig()
    config.playground.headers = {"Authorization": TOKEN}
    client = TestClient(GraphQLServer(config).app)
    assert TOKEN in client.get("/").text


def test_default_plugin_order():
    plugins = default_plugins()
    assert [type(p) for p in plugins] == [ValidationCachePlugin, TimingPlugin, LoggingPlugin, AuthPlugin]

    config = HookgraphConfig()
    config.cache.enabled = False
    assert ValidationCachePlugin not in [type(p) for p in default_plugins(config)]


def test_configured_token_and_path():
    config = HookgraphConfig()
    config.auth.token = "letmein"
    config.server.graphql_path = "/api"
    client = TestClient(GraphQLServer(config).app)

    assert client.post("/api", json={"query": "{ hello }"}, headers={"Authorization": TOKEN}).status_code == 401
    r = client.post("/api", json={"query": "{ hello }"}, headers={"Authorization": "letmein"})
    assert r.json() == {"data": {"hello": "Hello from Envelop!"}}
