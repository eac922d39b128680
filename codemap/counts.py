"""Namespace, type and method tallies over member forests."""

from typing import Iterable

from codemap.models import FileMap, Member, MemberCounts, MemberKind


def count_member(member: Member) -> MemberCounts:
    """Count one member and its whole subtree."""
    counts = MemberCounts(
        namespaces=1 if member.kind is MemberKind.NAMESPACE else 0,
        types=1 if member.kind.is_type else 0,
        methods=1 if member.kind.is_callable else 0,
    )
    return counts + count_members(member.children)


def count_members(members: Iterable[Member]) -> MemberCounts:
    total = MemberCounts()
    for member in members:
        total = total + count_member(member)
    return total


def count_files(file_maps: Iterable[FileMap]) -> MemberCounts:
    """Tally every member of every file exactly once."""
    total = MemberCounts()
    for file_map in file_maps:
        total = total + count_members(file_map.members)
    return total
