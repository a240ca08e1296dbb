"""In-memory account/container/object store for MockSwift.

All data is lost when the process exits. Every piece of state reachable from
a :class:`SwiftStore` (accounts, sessions and everything below them) is
guarded by the single ``store.lock``; the store methods themselves do not
lock, so callers hold the lock across a whole request's lookups and
mutations.
"""

import logging
import secrets
import threading

from mockswift.listing import ordered
from mockswift.models import Account, Container, Metadata, Session, SwiftObject

logger = logging.getLogger(__name__)


class SwiftStore:
    """In-memory Swift store.

    Attributes:
        accounts: Account name -> Account.
        sessions: Auth token -> Session.
        lock: The one mutual-exclusion lock for all of the above.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.sessions: dict[str, Session] = {}
        self.lock = threading.Lock()

    # -- Accounts ---------------------------------------------------------------

    def add_account(self, name: str, password: str = "") -> Account:
        """Create an account, or return the existing one of that name."""
        account = self.accounts.get(name)
        if account is None:
            account = Account(name=name, password=password)
            self.accounts[name] = account
            logger.debug("Created account %s", name)
        return account

    def get_account(self, name: str) -> Account | None:
        return self.accounts.get(name)

    # -- Containers -------------------------------------------------------------

    def create_container(self, account: Account, name: str) -> Container:
        """Create a container in ``account``.

        Raises:
            KeyError: If the container already exists.
        """
        if name in account.containers:
            raise KeyError(f"Container already exists: {name}")
        container = Container(name=name)
        account.containers[name] = container
        return container

    def get_container(self, account: Account, name: str) -> Container | None:
        return account.containers.get(name)

    def delete_container(self, account: Account, name: str) -> None:
        account.containers.pop(name, None)

    def ordered_containers(self, account: Account) -> list[Container]:
        return ordered(account.containers.values())

    # -- Objects ----------------------------------------------------------------

    def put_object(
        self,
        container: Container,
        name: str,
        data: bytes,
        meta: Metadata | None = None,
    ) -> SwiftObject:
        """Create or overwrite an object.

        The stored object is always a new instance with a new version id.
        """
        obj = SwiftObject(name=name, data=data, meta=meta if meta is not None else Metadata())
        container.objects[name] = obj
        return obj

    def get_object(self, container: Container, name: str) -> SwiftObject | None:
        return container.objects.get(name)

    def delete_object(self, container: Container, name: str) -> None:
        container.objects.pop(name, None)

    def ordered_objects(self, container: Container) -> list[SwiftObject]:
        return ordered(container.objects.values())

    # -- Aggregates ---------------------------------------------------------------

    def account_totals(self, account: Account) -> tuple[int, int, int]:
        """Return (container count, object count, bytes used) for ``account``."""
        objects = 0
        bytes_used = 0
        for container in account.containers.values():
            objects += len(container.objects)
            bytes_used += container.bytes_used
        return len(account.containers), objects, bytes_used

    def totals(self) -> tuple[int, int]:
        """Return (container count, object count) across all accounts."""
        containers = 0
        objects = 0
        for account in self.accounts.values():
            n_containers, n_objects, _ = self.account_totals(account)
            containers += n_containers
            objects += n_objects
        return containers, objects

    # -- Sessions -----------------------------------------------------------------

    def create_session(self, username: str) -> Session:
        """Issue a new auth token for ``username``."""
        token = f"AUTH_tk{secrets.token_hex(16)}"
        session = Session(token=token, username=username)
        self.sessions[token] = session
        return session

    def get_session(self, token: str) -> Session | None:
        return self.sessions.get(token)
