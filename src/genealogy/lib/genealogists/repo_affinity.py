"""Repository-affinity genealogist.

Posts that share a code repository are closely related:

* neither post has a repository:  20
* only one of them has one:        0
* both have the same repository: 100
* both have different ones:       50
"""

from collections.abc import Collection

from ...models import Post, repository_of
from .base import Genealogist, GenealogistService, RelationType, TypedRelation

TYPE = RelationType("repo")


def repository_score(repo1: str | None, repo2: str | None) -> int:
    if (repo1 is None) != (repo2 is None):
        return 0
    # either both are missing or both are present
    if repo1 is None:
        return 20
    return 100 if repo1 == repo2 else 50


class RepoAffinityGenealogist(Genealogist):

    @property
    def relation_type(self) -> RelationType:
        return TYPE

    def infer(self, post1: Post, post2: Post) -> TypedRelation:
        score = repository_score(repository_of(post1), repository_of(post2))
        return self.relate(post1, post2, score)


class RepoAffinityGenealogistService(GenealogistService):

    @property
    def name(self) -> str:
        return str(TYPE)

    def procure(self, posts: Collection[Post]) -> Genealogist:
        return RepoAffinityGenealogist()
