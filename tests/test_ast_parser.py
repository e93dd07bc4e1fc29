import pytest

from gentools.ast_parser import (
    ASTParser,
    FieldDecl,
    FieldKind,
    RecordDecl,
    SASTResult,
)
from gentools.sast import SASTType, SerializationPolicy


def _pod_record():
    return RecordDecl(
        name="POD",
        annotations=["serializable:pod"],
        fields=[
            FieldDecl("one", "uint16_t", FieldKind.INTEGER),
            FieldDecl("two", "uint32_t", FieldKind.INTEGER),
            FieldDecl("str", "std::string", FieldKind.RECORD),
        ],
    )


def _valid_record():
    return RecordDecl(
        name="ValidTestType",
        annotations=["serializable:JSON,XML"],
        fields=[FieldDecl("pod", "POD", FieldKind.RECORD, ["serialize"])],
    )


def test_detects_simple_serializable_class():
    result = SASTResult(file_path="ValidHeader.hpp")
    ASTParser(result).handle_translation_unit([_pod_record(), _valid_record()])
    assert "ValidTestType" in result.map
    assert "POD" in result.map
    assert [node.name for node in result.tree] == ["POD", "ValidTestType"]


def test_object_field_links_to_known_record():
    result = SASTResult()
    parser = ASTParser(result)
    pod = parser.visit_record(_pod_record())
    node = parser.visit_record(_valid_record())
    assert node.fields[0].type is SASTType.OBJECT
    assert node.fields[0].object_node is pod
    assert node.formats == ["JSON", "XML"]


def test_pod_policy_includes_all_fields():
    node = ASTParser(SASTResult()).visit_record(_pod_record())
    assert node.serialization_policy is SerializationPolicy.POD
    assert [(f.name, f.type) for f in node.fields] == [
        ("one", SASTType.INT),
        ("two", SASTType.INT),
        ("str", SASTType.STRING),
    ]
    assert node.fields[0].original_type_name == "uint16_t"


@pytest.mark.parametrize(
    "annotation, policy",
    [
        ("serializable:all", SerializationPolicy.ALL),
        ("serializable:public", SerializationPolicy.PUBLIC),
        ("serializable:protected", SerializationPolicy.PROTECTED),
        ("serializable:private", SerializationPolicy.PRIVATE),
        ("serializable:pod", SerializationPolicy.POD),
        ("serializable:", SerializationPolicy.CUSTOM),
    ],
)
def test_policy_from_annotation(annotation, policy):
    node = ASTParser(SASTResult()).visit_record(RecordDecl("T", [annotation]))
    assert node.serialization_policy is policy
    assert node.formats == []


def test_trailing_comma_gives_no_empty_format():
    node = ASTParser(SASTResult()).visit_record(RecordDecl("T", ["serializable:A,"]))
    assert node.formats == ["A"]


def test_forward_declaration_is_skipped():
    result = SASTResult()
    record = RecordDecl("T", ["serializable:XML"], is_definition=False)
    assert ASTParser(result).visit_record(record) is None
    assert result.map == {}


def test_unmarked_record_is_skipped():
    result = SASTResult()
    assert ASTParser(result).visit_record(RecordDecl("T", ["other"])) is None
    assert result.tree == []


def test_field_annotations_under_custom_policy():
    record = RecordDecl(
        "T",
        ["serializable:XML"],
        fields=[
            FieldDecl("a", "int", FieldKind.INTEGER, ["serialize"]),
            FieldDecl("b", "int", FieldKind.INTEGER, ["serialize:renamed"]),
            FieldDecl("c", "int", FieldKind.INTEGER, ["serialize:exclude"]),
            FieldDecl("d", "int", FieldKind.INTEGER),
        ],
    )
    node = ASTParser(SASTResult()).visit_record(record)
    assert [f.name for f in node.fields] == ["a", "renamed"]


def test_all_policy_includes_unmarked_and_excluded_fields():
    record = RecordDecl(
        "T",
        ["serializable:all"],
        fields=[
            FieldDecl("a", "int", FieldKind.INTEGER),
            FieldDecl("b", "int", FieldKind.INTEGER, ["serialize:exclude"]),
        ],
    )
    node = ASTParser(SASTResult()).visit_record(record)
    assert [f.name for f in node.fields] == ["a", "b"]


def test_public_policy_includes_only_marked_fields():
    record = RecordDecl(
        "T",
        ["serializable:public"],
        fields=[
            FieldDecl("a", "int", FieldKind.INTEGER),
            FieldDecl("b", "int", FieldKind.INTEGER, ["serialize"]),
        ],
    )
    node = ASTParser(SASTResult()).visit_record(record)
    assert [f.name for f in node.fields] == ["b"]


@pytest.mark.parametrize(
    "kind, type_name, expected",
    [
        (FieldKind.INTEGER, "int", SASTType.INT),
        (FieldKind.FLOAT, "float", SASTType.FLOAT),
        (FieldKind.DOUBLE, "double", SASTType.DOUBLE),
        (FieldKind.DOUBLE, "long double", SASTType.DOUBLE),
        (FieldKind.BOOLEAN, "bool", SASTType.BOOL),
        (FieldKind.RECORD, "std::string", SASTType.STRING),
        (FieldKind.RECORD, "Unknown", SASTType.OBJECT),
        (FieldKind.OTHER, "int *", SASTType.OBJECT),
    ],
)
def test_field_type_mapping(kind, type_name, expected):
    record = RecordDecl("T", ["serializable:all"], fields=[FieldDecl("x", type_name, kind)])
    node = ASTParser(SASTResult()).visit_record(record)
    assert node.fields[0].type is expected
    assert node.fields[0].original_type_name == type_name


def test_unknown_record_field_is_left_unlinked():
    record = RecordDecl(
        "T", ["serializable:all"], fields=[FieldDecl("x", "Other", FieldKind.RECORD)]
    )
    node = ASTParser(SASTResult()).visit_record(record)
    assert node.fields[0].object_node is None


def test_record_name_used_for_lookup():
    result = SASTResult()
    parser = ASTParser(result)
    inner = parser.visit_record(RecordDecl("ns::Inner", ["serializable:pod"]))
    record = RecordDecl(
        "T",
        ["serializable:all"],
        fields=[FieldDecl("x", "Inner", FieldKind.RECORD, record_name="ns::Inner")],
    )
    node = parser.visit_record(record)
    assert node.fields[0].object_node is inner
    assert node.fields[0].original_type_name == "Inner"


def test_serializable_bases_are_recorded():
    result = SASTResult()
    parser = ASTParser(result)
    base = RecordDecl("Base", ["serializable:XML"])
    plain = RecordDecl("Plain")
    base_node = parser.visit_record(base)
    node = parser.visit_record(RecordDecl("Derived", ["serializable:XML"], bases=[base, plain]))
    assert node.base_nodes == [base_node]


def test_annotated_base_not_yet_seen_is_not_recorded():
    base = RecordDecl("Base", ["serializable:XML"])
    node = ASTParser(SASTResult()).visit_record(
        RecordDecl("Derived", ["serializable:XML"], bases=[base])
    )
    assert node.base_nodes == []


def test_nested_records_are_visited_after_parent():
    result = SASTResult()
    inner = RecordDecl("Outer::Inner", ["serializable:XML"])
    outer = RecordDecl("Outer", ["serializable:XML"], nested=[inner])
    ASTParser(result).handle_translation_unit([outer])
    assert [node.name for node in result.tree] == ["Outer", "Outer::Inner"]


def test_translation_unit_validates_prepared_file(tmp_path):
    source = tmp_path / "Widget.h"
    source.write_text(
        '#include "Widget.generated.h"\nclass W { GENERATED_SERIALIZATION_BODY() };\n'
    )
    result = SASTResult(file_path=str(source))
    outcome = ASTParser(result).handle_translation_unit([RecordDecl("W", ["serializable:XML"])])
    assert outcome is True


def test_translation_unit_reports_unprepared_file(tmp_path):
    source = tmp_path / "Widget.h"
    source.write_text("class W {};\n")
    result = SASTResult(file_path=str(source))
    outcome = ASTParser(result).handle_translation_unit([RecordDecl("W", ["serializable:XML"])])
    assert outcome is False
    assert "W" in result.map


def test_translation_unit_without_serializable_types_skips_validation():
    result = SASTResult(file_path="missing.h")
    assert ASTParser(result).handle_translation_unit([RecordDecl("Plain")]) is None
    assert result.tree == []