"""
Authorization plugin - gates execution on a static bearer token.

The token is compared by exact string equality against one configured
secret. There is no expiry, per-user scoping or rotation.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.errors import UnauthorizedError
from ..core.hooks import ExecutionArgs, HookResult, Plugin
from ..runtime.context import Identity, RequestContext, TransportInput

logger = logging.getLogger(__name__)

DEFAULT_SECRET = "Bearer secret-token"
DEFAULT_HEADER = "authorization"


class AuthPlugin(Plugin):
    """
    Derive ``context.user`` from a header and refuse anonymous execution.

    Args:
        secret: Exact header value that authenticates
        header: Header carrying the credential
        identity: Identity assigned on a match
    """

    name = "auth"

    def __init__(
        self,
        secret: str = DEFAULT_SECRET,
        header: str = DEFAULT_HEADER,
        identity: Optional[Identity] = None,
    ):
        self.secret = secret
        self.header = header
        self.identity = identity or Identity(name="Admin", roles=("admin",))

    def authenticate(self, token: Optional[str]) -> Optional[Identity]:
        """Identity for a credential, None when it does not match the secret."""
        if token is not None and token == self.secret:
            return self.identity
        return None

    def on_context_building(self, context: RequestContext, transport: TransportInput) -> None:
        context.user = self.authenticate(transport.header(self.header))
        if context.user is None:
            logger.debug(f"No identity for request to {transport.path}")

    def on_execute(self, args: ExecutionArgs) -> HookResult:
        if getattr(args.context_value, "user", None) is None:
            return HookResult.abort(UnauthorizedError())
        return HookResult.proceed()
