"""Unit tests for counts.py"""

import unittest

from codemap.counts import count_files, count_member, count_members
from codemap.models import FileMap, Member, MemberCounts, MemberKind


def leaf(kind: MemberKind, signature: str = "x") -> Member:
    return Member(kind=kind, signature=signature)


class TestCounts(unittest.TestCase):
    def test_single_member(self):
        self.assertEqual(count_member(leaf(MemberKind.METHOD)), MemberCounts(0, 0, 1))
        self.assertEqual(count_member(leaf(MemberKind.PROPERTY)), MemberCounts(0, 0, 0))

    def test_type_kinds(self):
        members = [leaf(k) for k in (
            MemberKind.CLASS, MemberKind.INTERFACE, MemberKind.RECORD, MemberKind.ENUM
        )]
        self.assertEqual(count_members(members), MemberCounts(0, 4, 0))

    def test_nesting_depth_does_not_matter(self):
        deep = Member(
            kind=MemberKind.NAMESPACE,
            signature="A",
            children=(
                Member(
                    kind=MemberKind.NAMESPACE,
                    signature="A.B",
                    children=(
                        Member(
                            kind=MemberKind.CLASS,
                            signature="C",
                            children=(
                                leaf(MemberKind.CONSTRUCTOR),
                                Member(
                                    kind=MemberKind.CLASS,
                                    signature="Inner",
                                    children=(leaf(MemberKind.METHOD),),
                                ),
                            ),
                        ),
                    ),
                ),
            ),
        )
        flat = [
            leaf(MemberKind.METHOD),
            leaf(MemberKind.CLASS),
            leaf(MemberKind.NAMESPACE),
            leaf(MemberKind.CONSTRUCTOR),
            leaf(MemberKind.CLASS),
            leaf(MemberKind.NAMESPACE),
        ]
        self.assertEqual(count_member(deep), MemberCounts(2, 2, 2))
        self.assertEqual(count_members(flat), count_member(deep))
        self.assertEqual(count_members(reversed(flat)), count_member(deep))

    def test_files_are_summed(self):
        files = [
            FileMap(path="a.cs", members=(leaf(MemberKind.CLASS),)),
            FileMap(path="b.cs", members=(leaf(MemberKind.NAMESPACE), leaf(MemberKind.METHOD))),
        ]
        self.assertEqual(count_files(files), MemberCounts(1, 1, 1))
        self.assertEqual(count_files([]), MemberCounts())

    def test_counts_add(self):
        self.assertEqual(MemberCounts(1, 2, 3) + MemberCounts(4, 5, 6), MemberCounts(5, 7, 9))


if __name__ == "__main__":
    unittest.main()
