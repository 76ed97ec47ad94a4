"""
Demo server - minimal configuration example.

Usage:
    uvicorn main:app --port 8080

    curl -X POST http://localhost:8080/graphql \
        -H 'Content-Type: application/json' \
        -H 'Authorization: Bearer secret-token' \
        -d '{"query": "{ hello }"}'
"""

from hookgraph import GraphQLServer, resolve_config

config = resolve_config()
# Let the GraphiQL page authenticate like a client would
config.playground.headers = {"Authorization": config.auth.token}

app = GraphQLServer(config).app
