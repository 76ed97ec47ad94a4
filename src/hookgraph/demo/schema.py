"""
Demo schema and resolvers served by the default application.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from graphql import GraphQLResolveInfo, GraphQLSchema, build_schema


SDL = """
type User {
  id: ID!
  name: String!
  email: String!
}

type Message {
  message: String!
  timestamp: String!
}

type Query {
  hello: String!
  users: [User!]!
  user(id: ID!): User
}

type Mutation {
  sendMessage(message: String!): Message!
}
"""

USERS: tuple[dict[str, str], ...] = (
    {"id": "1", "name": "Alice", "email": "alice@example.com"},
    {"id": "2", "name": "Bob", "email": "bob@example.com"},
    {"id": "3", "name": "Carol", "email": "carol@example.com"},
)


def resolve_hello(info: GraphQLResolveInfo) -> str:
    return "Hello from Envelop!"


def resolve_users(info: GraphQLResolveInfo) -> list[dict[str, str]]:
    return [dict(user) for user in USERS]


def resolve_user(info: GraphQLResolveInfo, id: str) -> Optional[dict[str, str]]:
    # Unknown id resolves to null, not an error
    return next((dict(user) for user in USERS if user["id"] == id), None)


def resolve_send_message(info: GraphQLResolveInfo, message: str) -> dict[str, str]:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"message": message, "timestamp": timestamp}


def build_demo_schema() -> GraphQLSchema:
    """Build the demo schema from SDL."""
    return build_schema(SDL)


def build_root_value() -> dict[str, Any]:
    """
    Root resolver set.

    graphql-core's default resolver calls callables found on the root
    mapping as ``resolver(info, **args)``.
    """
    return {
        "hello": resolve_hello,
        "users": resolve_users,
        "user": resolve_user,
        "sendMessage": resolve_send_message,
    }
