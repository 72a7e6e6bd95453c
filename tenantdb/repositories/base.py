"""
Base repository pattern implementation for database operations.

This module provides the generic repository every entity repository extends.
A subclass is pure configuration: it names its model, its key fields, the
relations callers may ask to eager-load (each with a fixed projection), and
the fields that may be filtered and sorted on. All CRUD, relation loading,
pagination and error translation lives here.

Example:
    class CompanyUserRepository(BaseRepository[CompanyUser]):
        model = CompanyUser
        key = ("company_id", "user_id")
        relations = {"company": Relation("company", ("name", "slug"))}
        filter_fields = ("company_id", "user_id", "role", "is_active")

    repo = CompanyUserRepository(database)
    member = await repo.find_unique(("c-1", "u-1"), include=["company"])
"""

import logging
import operator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import (Any, AsyncIterator, ClassVar, Dict, Generic, Iterable, List,
                    Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union)

from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload
from sqlalchemy.sql import Select

from tenantdb.adapters.database import DatabaseAdapter
from tenantdb.exceptions import InvalidQueryError, NotFoundError, PersistenceError, RepositoryError
from tenantdb.models.base import Base

# Type variable for the model
T = TypeVar('T', bound=Base)

# A scalar for single keys, a tuple in key order or a mapping by field name
Key = Union[Any, Tuple[Any, ...], Mapping[str, Any]]

RANGE_OPERATORS = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relation:
    """
    A relation callers may eager-load by name.

    Attributes:
        attribute (str): relationship attribute on the model
        fields (Tuple[str, ...]): columns of the related entity to load; empty
            loads every column. Primary keys are always loaded. When ``nested``
            walks a many-to-one relation, its foreign key column must be listed.
        nested (Tuple[Relation, ...]): relations of the related entity to load
            in the same unit of work
    """
    attribute: str
    fields: Tuple[str, ...] = ()
    nested: Tuple["Relation", ...] = ()

    def loader(self, model: Type[Base]):
        """Build the loader option for this relation starting at ``model``."""
        relationship_attr = getattr(model, self.attribute)
        target = relationship_attr.property.mapper.class_

        sub_options = []
        if self.fields:
            sub_options.append(load_only(*(getattr(target, name) for name in self.fields)))
        sub_options.extend(child.loader(target) for child in self.nested)

        option = selectinload(relationship_attr)
        if sub_options:
            option = option.options(*sub_options)
        return option


class BaseRepository(Generic[T]):
    """
    Generic async repository for one entity kind.

    Every public method is a single unit of work: it opens a session from the
    shared adapter, runs its statement, commits when writing and closes the
    session. Reads signal absence with ``None`` or an empty list; ``update``
    and ``delete`` raise :class:`NotFoundError`; any failure of the store is
    logged here and raised as :class:`PersistenceError` with a generic message.

    Class attributes:
        model: mapped class handled by the repository
        key: key field names, one for surrogate keys, two for composite keys
        relations: relation name -> :class:`Relation` callers may include
        filter_fields: fields accepted by ``find_all``/``count`` filters, with
            optional ``__gt``, ``__gte``, ``__lt``, ``__lte`` suffixes
        sort_fields: fields accepted in ``order_by``; prefix ``-`` for descending
        default_order: order used when ``order_by`` is not given
        default_take: page size used when ``take`` is not given
        label: entity name used in logs and error messages
    """

    model: ClassVar[Type[Base]]
    key: ClassVar[Tuple[str, ...]] = ("id",)
    relations: ClassVar[Mapping[str, Relation]] = {}
    filter_fields: ClassVar[Tuple[str, ...]] = ()
    sort_fields: ClassVar[Tuple[str, ...]] = ("created_at",)
    default_order: ClassVar[Tuple[str, ...]] = ("-created_at",)
    default_take: ClassVar[Optional[int]] = None
    label: ClassVar[str] = ""

    def __init__(self, database: DatabaseAdapter, model: Optional[Type[T]] = None):
        """
        Initialize the repository with the shared database adapter.

        Args:
            database (DatabaseAdapter): initialized process-wide adapter
            model (Type[T], optional): overrides the class-level ``model``
        """
        self.database = database
        if model is not None:
            self.model = model
        self.entity_label = self.label or self.model.__name__
        self._columns = frozenset(attr.key for attr in inspect(self.model).column_attrs)

    # ------------------------------------------------------------------
    # Query building
    # ------------------------------------------------------------------

    def _reject(self, message: str) -> InvalidQueryError:
        logger.warning(message)
        return InvalidQueryError(message)

    def _key_values(self, key: Key) -> Dict[str, Any]:
        if isinstance(key, Mapping):
            if set(key) != set(self.key):
                raise self._reject(
                    f"{self.entity_label} is keyed by {', '.join(self.key)}, got {', '.join(sorted(key))}."
                )
            return {name: key[name] for name in self.key}

        if isinstance(key, (tuple, list)):
            if len(key) != len(self.key):
                raise self._reject(
                    f"{self.entity_label} is keyed by {', '.join(self.key)}, got {len(key)} value(s)."
                )
            return dict(zip(self.key, key))

        if len(self.key) != 1:
            raise self._reject(f"{self.entity_label} is keyed by {', '.join(self.key)}.")
        return {self.key[0]: key}

    def _describe_key(self, key: Key) -> Any:
        values = self._key_values(key)
        return values[self.key[0]] if len(self.key) == 1 else values

    def _key_clause(self, key: Key) -> list:
        return [getattr(self.model, name) == value for name, value in self._key_values(key).items()]

    def _include_options(self, include: Union[str, Iterable[str], None]) -> list:
        if isinstance(include, str):
            include = (include,)
        options = []
        for name in include or ():
            relation = self.relations.get(name)
            if relation is None:
                raise self._reject(f"Unknown relation '{name}' for {self.entity_label}.")
            options.append(relation.loader(self.model))
        return options

    def _filter_clause(self, filters: Optional[Mapping[str, Any]]) -> list:
        clauses = []
        for name, value in (filters or {}).items():
            field_name, _, op = name.partition("__")
            if field_name not in self.filter_fields:
                raise self._reject(f"Cannot filter {self.entity_label} on '{field_name}'.")
            column = getattr(self.model, field_name)
            if not op:
                clauses.append(column.is_(None) if value is None else column == value)
            elif op in RANGE_OPERATORS:
                clauses.append(RANGE_OPERATORS[op](column, value))
            else:
                raise self._reject(f"Unsupported filter operator '{op}' on '{field_name}'.")
        return clauses

    def _order_clause(self, order_by: Union[str, Sequence[str], None]) -> list:
        if order_by is None:
            order_by = self.default_order
        elif isinstance(order_by, str):
            order_by = (order_by,)

        allowed = set(self.sort_fields) | {name.lstrip("-") for name in self.default_order}
        clauses = []
        seen = set()
        for item in order_by:
            name = item.lstrip("-")
            if name not in allowed:
                raise self._reject(f"Cannot sort {self.entity_label} on '{name}'.")
            column = getattr(self.model, name)
            clauses.append(column.desc() if item.startswith("-") else column.asc())
            seen.add(name)

        # Key tiebreaker keeps equal sort values in a stable order
        clauses.extend(getattr(self.model, name).asc() for name in self.key if name not in seen)
        return clauses

    def _check_fields(self, data: Mapping[str, Any], updating: bool = False) -> None:
        unknown = sorted(set(data) - self._columns)
        if unknown:
            raise self._reject(f"Unknown {self.entity_label} field(s): {', '.join(unknown)}.")
        if updating:
            locked = sorted(set(data) & set(self.key))
            if locked:
                raise self._reject(f"Key field(s) of {self.entity_label} cannot be updated: {', '.join(locked)}.")

    def _select(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Union[str, Sequence[str], None] = None,
        include: Union[str, Iterable[str], None] = ()
    ) -> Select:
        return (
            select(self.model)
            .where(*self._filter_clause(filters))
            .order_by(*self._order_clause(order_by))
            .options(*self._include_options(include))
        )

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _unit_of_work(self, action: str) -> AsyncIterator[AsyncSession]:
        """
        Open a session and translate store failures.

        The session rolls back on close when the body did not commit.
        Repository errors pass through unchanged; anything else is logged
        with its traceback and replaced by a generic :class:`PersistenceError`.
        """
        try:
            async with self.database.session() as session:
                yield session
        except RepositoryError:
            raise
        except Exception:
            logger.error(f"Error trying to {action} {self.entity_label}", exc_info=True)
            raise PersistenceError(f"Failed to {action} {self.entity_label}.") from None

    async def _fetch(self, session: AsyncSession, key: Key) -> Optional[T]:
        result = await session.execute(select(self.model).where(*self._key_clause(key)))
        return result.scalar_one_or_none()

    async def _one(self, statement: Select) -> Optional[T]:
        """Run a read expected to match at most one record."""
        async with self._unit_of_work("find") as session:
            result = await session.execute(statement)
            return result.scalar_one_or_none()

    async def _many(self, statement: Select) -> List[T]:
        async with self._unit_of_work("list") as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> T:
        """
        Create a new record.

        Args:
            data (Mapping[str, Any]): column values; the key and audit
                timestamps are generated when omitted

        Returns:
            T: the persisted instance including generated values

        Raises:
            InvalidQueryError: if ``data`` names a field the entity lacks
            PersistenceError: if the store rejects the insert
        """
        data = dict(data)
        self._check_fields(data)
        async with self._unit_of_work("create") as session:
            instance = self.model(**data)
            session.add(instance)
            await session.commit()
            await session.refresh(instance)
        logger.info(f"Created {self.entity_label} {self._identity(instance)}")
        return instance

    async def find_unique(self, key: Key, include: Union[str, Iterable[str], None] = ()) -> Optional[T]:
        """
        Get a record by its key.

        Args:
            key (Key): scalar, tuple in key order, or mapping by key field
            include: names of declared relations to eager-load

        Returns:
            Optional[T]: the instance, or None when no record matches
        """
        statement = select(self.model).where(*self._key_clause(key)).options(*self._include_options(include))
        instance = await self._one(statement)
        logger.debug(f"Lookup {self.entity_label} {self._describe_key(key)}: {'hit' if instance else 'miss'}")
        return instance

    async def find_by_id(self, id: Any, include: Union[str, Iterable[str], None] = ()) -> Optional[T]:
        """Get a record by its single surrogate key. See :meth:`find_unique`."""
        return await self.find_unique(id, include=include)

    async def find_all(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        skip: int = 0,
        take: Optional[int] = None,
        order_by: Union[str, Sequence[str], None] = None,
        include: Union[str, Iterable[str], None] = ()
    ) -> List[T]:
        """
        Get records matching ``filters`` in a reproducible order.

        Args:
            filters: equality (``{"status": "OPEN"}``) or range
                (``{"amount__gte": 10}``) conditions on declared fields
            skip (int): Number of records to skip
            take (int, optional): Maximum number of records to return
            order_by: sort key(s), ``"-field"`` for descending
            include: names of declared relations to eager-load

        Returns:
            List[T]: matching instances, possibly empty
        """
        take = self.default_take if take is None else take
        if skip < 0 or (take is not None and take < 0):
            raise self._reject("skip and take must not be negative.")

        statement = self._select(filters, order_by, include)
        if skip:
            statement = statement.offset(skip)
        if take is not None:
            statement = statement.limit(take)

        items = await self._many(statement)
        logger.debug(f"Listed {len(items)} {self.entity_label} record(s)")
        return items

    find_many = find_all

    async def update(self, key: Key, data: Mapping[str, Any]) -> T:
        """
        Merge ``data`` into an existing record.

        Only the supplied fields change; everything else is left as stored.

        Returns:
            T: the full updated instance

        Raises:
            NotFoundError: if no record matches ``key``
            InvalidQueryError: if ``data`` names unknown or key fields
            PersistenceError: if the store rejects the update
        """
        data = dict(data)
        self._check_fields(data, updating=True)
        described = self._describe_key(key)
        async with self._unit_of_work("update") as session:
            instance = await self._fetch(session, key)
            if instance is None:
                logger.warning(f"Update of missing {self.entity_label} {described}")
                raise NotFoundError(self.entity_label, described)
            for name, value in data.items():
                setattr(instance, name, value)
            await session.commit()
            await session.refresh(instance)
        logger.info(f"Updated {self.entity_label} {described}: {', '.join(sorted(data)) or 'no fields'}")
        return instance

    async def delete(self, key: Key) -> T:
        """
        Permanently delete a record.

        Returns:
            T: the instance as it was right before deletion

        Raises:
            NotFoundError: if no record matches ``key``
            PersistenceError: if the store rejects the delete (for example a
                restricting foreign key)
        """
        described = self._describe_key(key)
        async with self._unit_of_work("delete") as session:
            instance = await self._fetch(session, key)
            if instance is None:
                logger.warning(f"Delete of missing {self.entity_label} {described}")
                raise NotFoundError(self.entity_label, described)
            await session.delete(instance)
            await session.commit()
        logger.info(f"Deleted {self.entity_label} {described}")
        return instance

    remove = delete

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Count records matching ``filters`` (same vocabulary as :meth:`find_all`)."""
        statement = select(func.count()).select_from(self.model).where(*self._filter_clause(filters))
        async with self._unit_of_work("count") as session:
            result = await session.execute(statement)
            return result.scalar_one()

    async def exists(self, key: Key) -> bool:
        """Check whether a record with ``key`` exists."""
        statement = select(func.count()).select_from(self.model).where(*self._key_clause(key))
        async with self._unit_of_work("find") as session:
            result = await session.execute(statement)
            return result.scalar_one() > 0

    def _identity(self, instance: T) -> Any:
        values = {name: getattr(instance, name) for name in self.key}
        return values[self.key[0]] if len(self.key) == 1 else values
