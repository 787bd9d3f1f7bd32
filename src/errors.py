"""Typed errors and data-quality issues for the layout engine.

Only ``InvalidTreeDataError`` is ever raised by the engine. The
``DataQualityIssue`` subclasses describe problems in the genealogy data itself;
they are collected and returned with the layout so a caller can report them
(or raise them, if it wants to be strict).
"""


class FamilyLayoutError(Exception):
    """Base error for the project."""


class InvalidTreeDataError(FamilyLayoutError, TypeError):
    """Input has the wrong shape or types (programmer error)."""


class DataQualityIssue(FamilyLayoutError):
    """A problem in the genealogy data that the layout worked around."""

    def __init__(self, member_id: str | None, message: str):
        super().__init__(message)
        self.member_id = member_id
        self.message = message

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.member_id == other.member_id
            and self.message == other.message
        )

    def __hash__(self):
        return hash((type(self).__name__, self.member_id, self.message))

    def __repr__(self):
        return f"{type(self).__name__}({self.member_id!r}, {self.message!r})"


class MissingReferenceError(DataQualityIssue):
    """A spouse/parent/child/owner/pet reference names an absent record."""

    def __init__(self, member_id: str, field_name: str, missing_id: str):
        super().__init__(member_id, f"{member_id}.{field_name} references missing id {missing_id!r}")
        self.field_name = field_name
        self.missing_id = missing_id


class CycleError(DataQualityIssue):
    """A parent chain loops back on itself."""

    def __init__(self, member_ids: list[str]):
        first = member_ids[0] if member_ids else None
        super().__init__(first, f"Cycle detected in parent-child relationships: {member_ids}")
        self.member_ids = list(member_ids)


class EmptyInputError(DataQualityIssue):
    """The tree has no members."""

    def __init__(self):
        super().__init__(None, "Family tree has no members")


class GenerationMismatchError(DataQualityIssue):
    """A member's declared generation disagrees with its parents'."""

    def __init__(self, member_id: str, declared: int, expected: int | None = None):
        if expected is None:
            message = f"{member_id} has invalid generation {declared}"
        else:
            message = f"{member_id} declares generation {declared}, parents imply {expected}"
        super().__init__(member_id, message)
        self.declared = declared
        self.expected = expected
