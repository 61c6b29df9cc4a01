"""Watchlist store service"""

import asyncio
import copy
import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import (
    IdentityNotFoundError,
    InvalidCategoryError,
    MissingIdentifierError,
    UpstreamUnavailableError,
)
from ..models.user import User
from ..schemas.lists import ALL_CATEGORIES, Category, ListItem
from .log_service import log_service
from .normalizer import normalize_item, parse_timestamp

Collection = Dict[Category, List[ListItem]]


def parse_category(value: Any, allow_all: bool = False) -> Union[Category, str]:
    """Resolve a list type name, accepting "all" only when allow_all is set"""
    if isinstance(value, Category):
        return value
    if allow_all and value == ALL_CATEGORIES:
        return ALL_CATEGORIES
    try:
        return Category(value)
    except ValueError:
        raise InvalidCategoryError(value) from None


def empty_collection() -> Collection:
    return {category: [] for category in Category}


def coerce_collection(raw: Any) -> Collection:
    """
    Build a collection from stored data.

    A category that is missing or not a list becomes empty. Stored entries
    are re-normalized; entries without an identifier are dropped and logged.
    """
    source = raw if isinstance(raw, dict) else {}
    collection = empty_collection()

    for category in Category:
        entries = source.get(category.value)
        if not isinstance(entries, list):
            if entries is not None:
                log_service.warning(
                    f"Stored '{category.value}' list is {type(entries).__name__}, "
                    "treating as empty"
                )
            continue

        for entry in entries:
            try:
                collection[category].append(normalize_item(entry))
            except MissingIdentifierError:
                log_service.warning(
                    f"Dropping stored '{category.value}' entry without imdbId"
                )

    return collection


def serialize_collection(collection: Collection) -> Dict[str, list]:
    """Storage/JSON shape of a collection"""
    return {
        category.value: [
            item.model_dump(mode="json", by_alias=True)
            for item in collection.get(category, [])
        ]
        for category in Category
    }


def without_item(
    collection: Collection, imdb_id: str, categories: Iterable[Category] = Category
) -> Collection:
    """Copy of collection with imdb_id removed from the given categories"""
    targets = set(categories)
    return {
        category: [
            item
            for item in items
            if category not in targets or item.imdb_id != imdb_id
        ]
        for category, items in collection.items()
    }


def with_item_at_head(
    collection: Collection, category: Category, item: ListItem
) -> Collection:
    updated = dict(collection)
    updated[category] = [item] + list(collection.get(category, []))
    return updated


def find_category(collection: Collection, imdb_id: str) -> Optional[Category]:
    for category in Category:
        if any(item.imdb_id == imdb_id for item in collection.get(category, [])):
            return category
    return None


class IdentityLocks:
    """One asyncio lock per identity, released for collection once unused"""

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def get(self, identity: Hashable) -> asyncio.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[identity] = lock
        return lock


@dataclass
class StoredLists:
    """Raw stored collection plus identity metadata"""

    lists: Any
    created_at: Optional[datetime] = None


class ListBackend:
    """Storage collaborator holding each identity's collection"""

    async def load(self, user_id: Hashable, for_update: bool = False) -> StoredLists:
        raise NotImplementedError

    async def save(self, user_id: Hashable, lists: Dict[str, list]) -> None:
        raise NotImplementedError


class DatabaseListBackend(ListBackend):
    """Collections stored in the users table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_user(self, user_id: Hashable, for_update: bool = False) -> User:
        query = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            log_service.error(f"Failed to load lists for user {user_id}: {e}")
            raise UpstreamUnavailableError("Failed to load lists") from e

        user = result.scalar_one_or_none()
        if user is None:
            raise IdentityNotFoundError(user_id)
        return user

    async def load(self, user_id: Hashable, for_update: bool = False) -> StoredLists:
        user = await self._get_user(user_id, for_update=for_update)
        return StoredLists(lists=user.lists, created_at=user.created_at)

    async def save(self, user_id: Hashable, lists: Dict[str, list]) -> None:
        user = await self._get_user(user_id)
        user.lists = lists
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_service.error(f"Failed to save lists for user {user_id}: {e}")
            raise UpstreamUnavailableError("Failed to save lists") from e


class MemoryListBackend(ListBackend):
    """Volatile storage for demo/offline identities"""

    def __init__(self):
        self._collections: Dict[Hashable, Dict[str, list]] = {}
        self._created_at: Dict[Hashable, Optional[datetime]] = {}

    def create(self, user_id: Hashable, created_at: Optional[datetime] = None):
        """Register an identity with an empty collection"""
        self._collections.setdefault(user_id, serialize_collection(empty_collection()))
        self._created_at.setdefault(user_id, parse_timestamp(created_at))

    async def load(self, user_id: Hashable, for_update: bool = False) -> StoredLists:
        if user_id not in self._collections:
            raise IdentityNotFoundError(user_id)
        return StoredLists(
            lists=copy.deepcopy(self._collections[user_id]),
            created_at=self._created_at.get(user_id),
        )

    async def save(self, user_id: Hashable, lists: Dict[str, list]) -> None:
        if user_id not in self._collections:
            raise IdentityNotFoundError(user_id)
        self._collections[user_id] = copy.deepcopy(lists)


# Shared by every ListService in the process
identity_locks = IdentityLocks()


class ListService:
    """Watchlist operations for one identity"""

    def __init__(
        self,
        backend: ListBackend,
        user_id: Hashable,
        locks: IdentityLocks = identity_locks,
    ):
        self.backend = backend
        self.user_id = user_id
        self.locks = locks

    async def get_all(self) -> Collection:
        """All five categories, each a valid (possibly empty) list"""
        stored = await self.backend.load(self.user_id)
        return coerce_collection(stored.lists)

    async def snapshot(self) -> Tuple[Collection, Optional[datetime]]:
        """Collection plus account creation time, for statistics"""
        stored = await self.backend.load(self.user_id)
        return coerce_collection(stored.lists), parse_timestamp(stored.created_at)

    async def upsert(self, category: Any, payload: Any) -> Collection:
        """
        Put a movie at the head of a category, removing it from every other.

        Category and payload are validated before storage is touched.
        """
        target = parse_category(category)
        item = normalize_item(payload)

        async with self.locks.get(self.user_id):
            stored = await self.backend.load(self.user_id, for_update=True)
            current = coerce_collection(stored.lists)
            updated = with_item_at_head(
                without_item(current, item.imdb_id), target, item
            )
            await self.backend.save(self.user_id, serialize_collection(updated))

        log_service.info(
            f"User {self.user_id}: {item.imdb_id} ({item.title}) -> {target.value}"
        )
        return updated

    async def remove(self, category: Any, imdb_id: Any) -> Collection:
        """Remove a movie from one category, or from all with "all"."""
        scope = parse_category(category, allow_all=True)
        identifier = str(imdb_id).strip() if imdb_id is not None else ""
        if not identifier:
            raise MissingIdentifierError("Movie id is required")

        if scope == ALL_CATEGORIES:
            categories, scope_name = tuple(Category), ALL_CATEGORIES
        else:
            categories, scope_name = (scope,), scope.value

        async with self.locks.get(self.user_id):
            stored = await self.backend.load(self.user_id, for_update=True)
            current = coerce_collection(stored.lists)
            updated = without_item(current, identifier, categories)
            if updated == current:
                return current
            await self.backend.save(self.user_id, serialize_collection(updated))

        log_service.info(f"User {self.user_id}: removed {identifier} from {scope_name}")
        return updated

    async def category_of(self, imdb_id: str) -> Optional[Category]:
        return find_category(await self.get_all(), imdb_id)

    async def is_tracked(self, imdb_id: str) -> bool:
        return await self.category_of(imdb_id) is not None
