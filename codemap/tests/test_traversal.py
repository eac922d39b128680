"""
Unit tests for traversal.py

Tests member tree construction, visibility scoping, namespace forms and
nesting rules.
"""

import unittest

from codemap.models import MemberKind
from codemap.parser import parse_bytes
from codemap.traversal import get_declaration_kind, map_tree


def map_members(source: bytes, contextual_visibility: bool = False):
    file_map = map_tree(parse_bytes(source), "Test.cs", contextual_visibility)
    return file_map.members if file_map is not None else ()


class TestEndToEnd(unittest.TestCase):
    """The reference scenarios for the walker."""

    def test_file_scoped_namespace_class_members(self):
        source = (
            b"namespace A.B; public class C : Base, Iface { public C(int x) {} "
            b"public int M(string s) => 0; private int hidden() => 1; }"
        )
        members = map_members(source)

        self.assertEqual(len(members), 1)
        namespace = members[0]
        self.assertEqual(namespace.kind, MemberKind.NAMESPACE)
        self.assertEqual(namespace.signature, "A.B")
        self.assertEqual(len(namespace.children), 1)

        cls = namespace.children[0]
        self.assertEqual(cls.kind, MemberKind.CLASS)
        self.assertEqual(cls.signature, "C")
        self.assertEqual(cls.base_types, ("Base", "Iface"))
        self.assertEqual(
            [(c.kind, c.signature) for c in cls.children],
            [(MemberKind.CONSTRUCTOR, "C(int x)"), (MemberKind.METHOD, "int M(string s)")],
        )

    def test_enum_is_a_leaf(self):
        members = map_members(b"public enum Status { Active, Inactive }")

        self.assertEqual(len(members), 1)
        self.assertEqual(members[0].kind, MemberKind.ENUM)
        self.assertEqual(members[0].signature, "Status { Active, Inactive }")
        self.assertEqual(members[0].children, ())


class TestVisibilityScoping(unittest.TestCase):
    def test_private_class_and_descendants_absent(self):
        source = b"""
public class Outer
{
    private class Hidden
    {
        public void Leak() { }
        public class AlsoHidden { }
    }
    public void Shown() { }
}
"""
        outer = map_members(source)[0]
        self.assertEqual([c.signature for c in outer.children], ["void Shown()"])

    def test_protected_forms_are_excluded(self):
        source = b"""
public class Base
{
    protected void A() { }
    private protected void B() { }
    protected internal void C() { }
    internal void D() { }
}
"""
        base = map_members(source)[0]
        self.assertEqual([c.signature for c in base.children], ["void C()", "void D()"])

    def test_internal_top_level_class_included(self):
        members = map_members(b"internal class InternalClass { }")
        self.assertEqual(members[0].signature, "InternalClass")

    def test_unmarked_nested_member_included_by_default(self):
        cls = map_members(b"public class C { void Implicit() { } }")[0]
        self.assertEqual([c.signature for c in cls.children], ["void Implicit()"])

    def test_unmarked_nested_member_excluded_when_contextual(self):
        source = b"public class C { void Implicit() { } public void Explicit() { } }"
        cls = map_members(source, contextual_visibility=True)[0]
        self.assertEqual([c.signature for c in cls.children], ["void Explicit()"])

    def test_interface_members_kept_when_contextual(self):
        source = b"public interface IService { void Execute(); }"
        iface = map_members(source, contextual_visibility=True)[0]
        self.assertEqual(iface.kind, MemberKind.INTERFACE)
        self.assertEqual([c.signature for c in iface.children], ["void Execute()"])


class TestStructure(unittest.TestCase):
    def test_block_namespace_nests_members(self):
        source = b"namespace MyApp.Services { public class UserService { } }"
        members = map_members(source)

        self.assertEqual(len(members), 1)
        self.assertEqual(members[0].kind, MemberKind.NAMESPACE)
        self.assertEqual(members[0].signature, "MyApp.Services")
        self.assertEqual(members[0].line, 1)
        self.assertEqual(members[0].children[0].signature, "UserService")

    def test_namespace_forms_share_shape(self):
        block = map_members(b"namespace N { public class K { } }")[0]
        scoped = map_members(b"namespace N;\npublic class K { }")[0]

        self.assertEqual(block.kind, scoped.kind)
        self.assertEqual(block.signature, scoped.signature)
        self.assertEqual(block.line, scoped.line)
        self.assertEqual(
            [c.signature for c in block.children], [c.signature for c in scoped.children]
        )

    def test_file_scoped_namespace_owns_all_following_types(self):
        source = b"""using System;
namespace App;

public class First { }
public interface ISecond { }
public enum Third { One }
"""
        members = map_members(source)
        self.assertEqual(len(members), 1)
        self.assertEqual(members[0].line, 2)
        self.assertEqual(
            [c.kind for c in members[0].children],
            [MemberKind.CLASS, MemberKind.INTERFACE, MemberKind.ENUM],
        )

    def test_nested_classes_are_captured(self):
        source = b"""
public class Outer
{
    public class Inner { }
}
"""
        outer = map_members(source)[0]
        self.assertEqual(outer.signature, "Outer")
        self.assertEqual([c.signature for c in outer.children], ["Inner"])

    def test_method_bodies_are_not_entered(self):
        source = b"""
public class C
{
    public int Run()
    {
        int Local() => 1;
        var anon = new { X = 1 };
        return Local();
    }
}
"""
        cls = map_members(source)[0]
        self.assertEqual(len(cls.children), 1)
        self.assertEqual(cls.children[0].children, ())

    def test_members_in_declaration_order(self):
        source = b"""public class MyClass
{
    public string Name { get; set; }
    public int GetValue() { return 0; }
}"""
        cls = map_members(source)[0]
        self.assertEqual(
            [c.kind for c in cls.children], [MemberKind.PROPERTY, MemberKind.METHOD]
        )
        self.assertEqual([c.line for c in cls.children], [3, 4])

    def test_line_numbers_are_one_based(self):
        source = b"""
public class MyClass
{
    public void MyMethod() { }
}"""
        cls = map_members(source)[0]
        self.assertEqual(cls.line, 2)
        self.assertEqual(cls.children[0].line, 4)

    def test_record_members_and_static_flags(self):
        source = b"""
public static class Helpers
{
    public static void DoSomething() { }
}
public record UserDto(string Name, int Age);
"""
        helpers, record = map_members(source)
        self.assertTrue(helpers.is_static)
        self.assertTrue(helpers.children[0].is_static)
        self.assertEqual(record.kind, MemberKind.RECORD)
        self.assertEqual(record.signature, "UserDto(string Name, int Age)")
        self.assertFalse(record.is_static)

    def test_record_struct_maps_as_record(self):
        record = map_members(b"public record struct Point(int X, int Y);")[0]
        self.assertEqual(record.kind, MemberKind.RECORD)
        self.assertEqual(record.signature, "Point(int X, int Y)")

    def test_attributes_and_doc_attached(self):
        source = b"""
/// <summary>Serves orders.</summary>
[Obsolete]
[ApiController]
public class OrdersController { }
"""
        cls = map_members(source)[0]
        self.assertEqual(cls.attributes, ("Obsolete", "ApiController"))
        self.assertEqual(cls.doc, "Serves orders.")

    def test_unmapped_kinds_are_ignored(self):
        source = b"""
public struct Point { public int X; }
public delegate void Handler();
public class C
{
    public int Field;
    public event Handler Changed;
}
"""
        members = map_members(source)
        self.assertEqual(len(members), 1)
        self.assertEqual(members[0].signature, "C")
        self.assertEqual(members[0].children, ())

    def test_file_without_public_members_is_dropped(self):
        tree = parse_bytes(b"using System;\nprivate class Hidden { }\n")
        self.assertIsNone(map_tree(tree, "Hidden.cs"))

    def test_empty_file_is_dropped(self):
        self.assertIsNone(map_tree(parse_bytes(b""), "Empty.cs"))

    def test_declaration_kind_lookup(self):
        tree = parse_bytes(b"public interface I { }")
        self.assertEqual(
            get_declaration_kind(tree.root_node.named_children[0]), MemberKind.INTERFACE
        )
        self.assertIsNone(get_declaration_kind(tree.root_node))

    def test_repeated_mapping_is_identical(self):
        source = b"namespace N { public class A { public void B() { } } }"
        self.assertEqual(map_members(source), map_members(source))


if __name__ == "__main__":
    unittest.main()
