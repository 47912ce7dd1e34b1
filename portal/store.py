"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - In-memory store                                        ║
║                                                                              ║
║  One Repository per entity type, owned by a Store that is passed             ║
║  explicitly into every service. Nothing is persisted: a new Store is         ║
║  seeded from static data on each start.                                      ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from portal import config
from portal.config import now_iso, timestamp_ms
from portal.errors import NotFoundError, ValidationError
from portal.models import MEMBER_ROLES, Role, Session, User

T = TypeVar("T")

NOTIFICATION_SEVERITIES = ("success", "error", "info", "warning")


class Repository(Generic[T]):
    """Ordered collection of records keyed by one attribute"""

    def __init__(self, name: str, key: str):
        self.name = name
        self.key = key
        self._records: Dict = {}

    def _key_of(self, record: T):
        return getattr(record, self.key)

    def get(self, record_id) -> Optional[T]:
        return self._records.get(record_id)

    def require(self, record_id) -> T:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.name} {record_id} not found")
        return record

    def add(self, record: T) -> T:
        record_id = self._key_of(record)
        if record_id in self._records:
            raise ValidationError(f"{self.name} {record_id} already exists", code="duplicate_id")
        self._records[record_id] = record
        return record

    def replace(self, record: T) -> T:
        record_id = self._key_of(record)
        if record_id not in self._records:
            raise NotFoundError(f"{self.name} {record_id} not found")
        self._records[record_id] = record
        return record

    def remove(self, record_id) -> T:
        if record_id not in self._records:
            raise NotFoundError(f"{self.name} {record_id} not found")
        return self._records.pop(record_id)

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [r for r in self._records.values() if predicate(r)]

    def all(self) -> List[T]:
        return list(self._records.values())

    def __contains__(self, record_id) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)


class Store:
    """Session-scoped state: every collection the portal reads or writes"""

    def __init__(self):
        self.products: Repository = Repository("Product", "id")
        self.leads: Repository = Repository("Lead", "lead_id")
        self.orders: Repository = Repository("Order", "order_id")
        self.scripts: Repository = Repository("Script", "id")
        self.admins: Repository = Repository("Admin", "id")
        self.users: Dict[Role, Repository] = {
            role: Repository(f"{role.value.capitalize()} user", "id")
            for role in MEMBER_ROLES
        }
        self.sessions: Dict[str, Session] = {}
        self.carts: Dict = {}  # token -> services.cart.Cart
        self.notifications: List[dict] = []
        self.activity_logs: List[dict] = []
        self._last_id = 0
        self._notification_seq = 0

    @classmethod
    def seeded(cls) -> "Store":
        from portal.seed import seed_store
        store = cls()
        seed_store(store)
        return store

    def next_id(self) -> int:
        """Time-based id (ms), strictly increasing within this store"""
        self._last_id = max(timestamp_ms(), self._last_id + 1)
        return self._last_id

    def user_repo(self, role: Role) -> Repository:
        if role == Role.ADMIN:
            return self.admins
        repo = self.users.get(role)
        if repo is None:
            raise ValidationError(f"No user collection for role {role.value}", code="invalid_role")
        return repo

    def find_user(self, role: Role, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self.user_repo(role).get(user_id)

    def notify(self, message: str, severity: str = "info") -> dict:
        """Notification sink: user-facing feedback (message, severity)"""
        if severity not in NOTIFICATION_SEVERITIES:
            severity = "info"
        self._notification_seq += 1
        entry = {
            "seq": self._notification_seq,
            "message": message,
            "severity": severity,
            "created_at": now_iso(),
        }
        self.notifications.append(entry)
        # Bounded; pollers resume from the last seq they saw
        del self.notifications[:-config.NOTIFICATION_HISTORY]
        return entry
