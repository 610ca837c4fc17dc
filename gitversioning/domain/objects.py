"""
Git object and reference value objects.

A tag ref points either at a commit (lightweight tag) or at an
annotated tag object that in turn points at a commit. Objects read
from the object store are modelled as a closed union so that
resolution code can handle every case explicitly:

    Commit        - the object is a commit
    AnnotatedTag  - the object is a tag object wrapping another object
    OtherObject   - anything else (tree, blob)
"""

from dataclasses import dataclass
from typing import Union

TAG_NAMESPACE = "refs/tags/"


@dataclass(frozen=True)
class TagRef:
    """
    A tag reference as listed by the repository.

    Attributes:
        name: Full ref name (e.g., "refs/tags/v1.0.0")
        target: Object id the ref points to
    """

    name: str
    target: str

    @property
    def short_name(self) -> str:
        """Tag name without the refs/tags/ namespace."""
        if self.name.startswith(TAG_NAMESPACE):
            return self.name[len(TAG_NAMESPACE):]
        return self.name

    def __str__(self) -> str:
        return self.short_name


@dataclass(frozen=True)
class Commit:
    """A commit object."""
    id: str


@dataclass(frozen=True)
class AnnotatedTag:
    """
    An annotated tag object.

    Attributes:
        id: Object id of the tag object itself
        target: Object id of the annotated object
        target_kind: Object type of the annotated object ("commit", "tree", ...)
    """
    id: str
    target: str
    target_kind: str = "commit"


@dataclass(frozen=True)
class OtherObject:
    """Any object that is neither a commit nor a tag (tree, blob)."""
    id: str
    kind: str


GitObject = Union[Commit, AnnotatedTag, OtherObject]
