"""Introspection protocol definitions.

The query engine depends only on this protocol, so it can run over a
class's real members or over a synthetic member list.
"""

from typing import List, Protocol, runtime_checkable

from better_attributes.constants import MemberKind
from better_attributes.types.metadata import Member


@runtime_checkable
class MemberIntrospector(Protocol):
    """Protocol defining the interface for member introspectors.

    The protocol is marked as runtime_checkable to allow isinstance()
    checks when a class configures its own introspector.
    """

    def get_members(self, target: type, kind: MemberKind) -> List[Member]:
        """Return the members of ``target`` of the given kind.

        Args:
            target: Class whose members are listed
            kind: Member category to list

        Returns:
            Members in declaration order, each carrying its attached markers
        """
        ...
