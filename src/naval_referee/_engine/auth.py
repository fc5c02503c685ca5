# Area: Engine
"""
naval_referee._engine.auth — Authorization gate
===============================================

Every mutating operation asserts that the named principal authorized
the invocation. How authorization is proven (signatures, sessions)
belongs to the substrate; the referee only asks the gate.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator

from ..errors import UnauthorizedError

logger = logging.getLogger("naval_referee.engine.auth")


class Authorizer(ABC):
    """Answers "has this address authorized the current call?"."""

    @abstractmethod
    def is_authorized(self, address: str) -> bool:
        pass

    def require_auth(self, address: str) -> None:
        """
        Assert that address authorized the current invocation.

        Raises:
            UnauthorizedError: If it did not
        """
        if not self.is_authorized(address):
            logger.warning(f"Authorization missing for {address}")
            raise UnauthorizedError(address)


class MockAllAuths(Authorizer):
    """Authorizes every address. For tests and trusted local drivers."""

    def is_authorized(self, address: str) -> bool:
        return True


class SignerSetAuthorizer(Authorizer):
    """
    Authorizes only the addresses in the current signer set.

    Usage:
        auth = SignerSetAuthorizer({"alice"})
        with auth.signed_by("bob"):
            referee.join_game(1, "bob")
    """

    def __init__(self, signers: Iterable[str] = ()):
        self.signers = set(signers)

    def is_authorized(self, address: str) -> bool:
        return address in self.signers

    @contextmanager
    def signed_by(self, *addresses: str) -> Iterator["SignerSetAuthorizer"]:
        saved = self.signers
        self.signers = set(addresses)
        try:
            yield self
        finally:
            self.signers = saved
