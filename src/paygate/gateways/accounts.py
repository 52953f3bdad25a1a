"""Gateway accounts and account providers.

A gateway may own several named accounts (terminals, merchant ids). Accounts
are loaded asynchronously through a GatewayAccountProvider so they can come
from memory, environment or any other source the host plugs in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Protocol, TypeVar, runtime_checkable

from paygate.gateways.registry import normalize_name


@dataclass(frozen=True)
class GatewayAccount:
    """Base record for a gateway account. Gateways subclass it with their fields."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("account name is required")


A = TypeVar("A", bound=GatewayAccount)


class GatewayAccountCollection(Generic[A]):
    """Ordered accounts of one gateway, looked up by name (case-insensitive).

    The first account added is the default.
    """

    def __init__(self, accounts: Iterable[A] | None = None) -> None:
        self._accounts: dict[str, A] = {}
        for account in accounts or ():
            self.add(account)

    def add(self, account: A) -> None:
        if account is None:
            raise ValueError("account is required")
        key = normalize_name(account.name)
        if key in self._accounts:
            raise ValueError(f"Account '{account.name}' is already added")
        self._accounts[key] = account

    def get(self, name: str) -> A | None:
        """Get account by name, None if there is no such account."""
        if not name:
            return None
        return self._accounts.get(normalize_name(name))

    @property
    def default(self) -> A | None:
        """The first account, None for an empty collection."""
        return next(iter(self._accounts.values()), None)

    def __iter__(self) -> Iterator[A]:
        return iter(list(self._accounts.values()))

    def __len__(self) -> int:
        return len(self._accounts)

    def __repr__(self) -> str:
        names = [account.name for account in self._accounts.values()]
        return f"GatewayAccountCollection({names!r})"


@runtime_checkable
class GatewayAccountProvider(Protocol):
    """Loads the full account collection of a gateway."""

    async def load_accounts(self) -> GatewayAccountCollection[Any]:
        """Load all accounts."""
        ...


class InMemoryAccountProvider(Generic[A]):
    """Account provider backed by accounts given at composition time."""

    def __init__(self, accounts: Iterable[A]) -> None:
        self._accounts = GatewayAccountCollection(accounts)

    async def load_accounts(self) -> GatewayAccountCollection[A]:
        return self._accounts
