"""MongoDB index management.

Indexes are declared as IndexSpec lists and reconciled at startup: an existing
index that shares a name or a key pattern with a wanted one, but differs from
it, is dropped before the wanted index is created.
"""

from dataclasses import dataclass, field
from logging import getLogger

logger = getLogger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    name: str
    keys: list
    options: dict = field(default_factory=dict)


USER_INDEXES = [
    IndexSpec('idx_users_email', [('email', 1)], {'unique': True}),
    IndexSpec('idx_users_created_at', [('createdAt', -1)]),
]


def _conflicting(existing: dict, spec: IndexSpec) -> list[str]:
    """Names of existing indexes that would make creating `spec` fail."""
    names = []
    for name, info in existing.items():
        if name == '_id_':
            continue
        same_name = name == spec.name
        same_keys = [tuple(k) for k in info.get('key', [])] == [tuple(k) for k in spec.keys]
        if same_name and same_keys:
            # unique is the only option we declare
            if bool(info.get('unique', False)) != bool(spec.options.get('unique', False)):
                names.append(name)
        elif same_name or same_keys:
            names.append(name)
    return names


async def reconcile_indexes(collection, specs: list[IndexSpec]) -> None:
    """Drop conflicting indexes, then create every index in `specs`.

    PyMongoError propagates.
    """
    existing = await collection.index_information()
    for spec in specs:
        for name in _conflicting(existing, spec):
            logger.warning("Dropping conflicting index", extra={"index": name, "replacement": spec.name})
            await collection.drop_index(name)
            existing.pop(name)
        await collection.create_index(spec.keys, name=spec.name, **spec.options)


async def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at service startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        await MongoUserRepository(db).ensure_indexes(),
    ]
    return all(results)
