"""Base abstraction for genealogists.

A genealogist scores how strongly one post relates to another for a single,
named relation type.  Genealogists are not registered directly: each one is
procured once per run by a named :class:`GenealogistService`, which receives
the whole post collection and may precompute whatever it needs.  Services are
kept in a registry so they can be looked up by name from the command line or
configuration.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic_core import core_schema

from ...errors import InvalidArgument, NoGenealogistsError
from ...models import Post
from ..scores import check_score


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class RelationType(str):
    """Name of the kind of relation a genealogist infers (e.g. ``tag``).

    A string rather than an enum: genealogists are plugged in at runtime, so
    their relation types are not known in advance.
    """

    def __new__(cls, value: str):
        if not isinstance(value, str) or not value.strip():
            raise InvalidArgument(f"Relation types can't have an empty value: {value!r}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"RelationType({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        return core_schema.no_info_after_validator_function(cls, core_schema.str_schema())


class TypedRelation(BaseModel):
    """One genealogist's score for one ordered pair of posts."""

    model_config = ConfigDict(frozen=True)

    post1: Post
    post2: Post
    type: RelationType
    score: int

    @model_validator(mode="after")
    def check_relation(self):
        if self.post1 == self.post2:
            raise InvalidArgument(f"A post can't be related to itself: {self.post1.slug}")
        check_score(self.score, repr(self))
        return self

    def __repr__(self) -> str:
        return (
            f"TypedRelation(post1={self.post1.slug}, post2={self.post2.slug}, "
            f"type={self.type}, score={self.score})"
        )


# ---------------------------------------------------------------------------
# Abstract bases
# ---------------------------------------------------------------------------

class Genealogist(ABC):
    """Abstract base class for genealogists.

    Subclasses must implement `relation_type` (property) and `infer`.
    """

    @property
    @abstractmethod
    def relation_type(self) -> RelationType:
        """The relation type every inferred relation is tagged with."""
        ...

    @abstractmethod
    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        """Score how strongly *post1* relates to *post2*.

        The two posts are always distinct.  The returned relation carries this
        genealogist's relation type and a score in [0; 100].
        """
        ...

    def relate(self, post1: Post, post2: Post, score: int) -> TypedRelation:
        return TypedRelation(post1=post1, post2=post2, type=self.relation_type, score=score)


class GenealogistService(ABC):
    """Named factory that procures a genealogist for a post collection."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name identifying this service (e.g. ``tag``)."""
        ...

    @abstractmethod
    def procure(self, posts: Collection[Post]) -> Genealogist:
        ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_services: dict[str, GenealogistService] = {}


def register_service(service: GenealogistService) -> None:
    """Register a service by its name, replacing any service of the same name."""
    _services[service.name] = service


def get_service(name: str) -> GenealogistService | None:
    """Look up a registered service by name.  Returns ``None`` if not found."""
    return _services.get(name)


def list_services() -> list[str]:
    """Return the names of all registered services."""
    return list(_services.keys())


def procure_genealogists(
    posts: Collection[Post],
    names: Iterable[str] | None = None,
    overrides: Mapping[str, GenealogistService] | None = None,
) -> list[Genealogist]:
    """Procure one genealogist per named service (all registered ones by default).

    Services in *overrides* take the place of registered services of the same
    name for this call only; the registry itself is left untouched.

    Raises
    ------
    InvalidArgument
        If a name does not belong to a registered or overriding service.
    NoGenealogistsError
        If not a single genealogist was procured.
    """
    services = {**_services, **(overrides or {})}
    if names is None:
        names = list(services)

    genealogists: list[Genealogist] = []
    for name in names:
        service = services.get(name)
        if service is None:
            raise InvalidArgument(f"Unknown genealogist: {name}")
        genealogists.append(service.procure(posts))

    if not genealogists:
        raise NoGenealogistsError("No genealogists found.")
    return genealogists
