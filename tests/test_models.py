"""Tests for model detection and field extraction."""

from textwrap import dedent

import pytest

from sysvista.detectors.models import detect_models, extract_fields
from sysvista.schema import ComponentKind


def _names(components):
    return [c.name for c in components]


class TestTypeScriptModels:
    """Interfaces, type aliases and enums."""

    def test_inline_interface_fields(self):
        content = "interface User { id: string; name?: string; }"
        (model,) = detect_models(content, "typescript", "src/user.ts")
        assert model.name == "User"
        assert model.kind == ComponentKind.MODEL
        assert model.member_fields == ["id", "name"]
        assert model.line == 1

    def test_multiline_interface_skips_nested_and_comments(self):
        content = dedent("""\
            export interface Order {
              // primary key
              id: string;
              items: Array<{ sku: string }>;
              meta: {
                source: string;
              };
              readonly total: number
            }
        """)
        (model,) = detect_models(content, "typescript", "src/order.ts")
        assert model.member_fields == ["id", "items", "meta", "total"]

    def test_type_alias_without_body_has_no_fields(self):
        content = dedent("""\
            export type Status = "open" | "closed";

            export interface Ticket {
              status: Status;
            }
        """)
        models = detect_models(content, "typescript", "src/ticket.ts")
        assert _names(models) == ["Ticket", "Status"]
        by_name = {m.name: m for m in models}
        assert by_name["Status"].member_fields is None
        assert by_name["Ticket"].member_fields == ["status"]
        assert by_name["Ticket"].line == 3

    def test_enum(self):
        content = "export enum Role { Admin, User }\n"
        (model,) = detect_models(content, "typescript", "src/role.ts")
        assert model.name == "Role"
        assert model.member_fields is None

    def test_function_typed_member_is_one_field(self):
        content = dedent("""\
            interface Handler {
              cb: (a: string, b: number) => void;
              id: string;
            }
        """)
        (model,) = detect_models(content, "typescript", "src/handler.ts")
        assert model.member_fields == ["cb", "id"]

    def test_inline_callback_type_alias(self):
        content = (
            "type Props = "
            "{ onChange: (value: string, index: number) => void }"
        )
        (model,) = detect_models(content, "typescript", "src/props.ts")
        assert model.member_fields == ["onChange"]

    def test_generic_arguments_stay_in_member(self):
        content = (
            "interface Cache { entries: Map<string, number>, "
            "tags: Array<[string, string]> }"
        )
        (model,) = detect_models(content, "typescript", "src/cache.ts")
        assert model.member_fields == ["entries", "tags"]

    def test_javascript_uses_same_patterns(self):
        models = detect_models(
            "interface Point { x: number }", "javascript", "p.js"
        )
        assert _names(models) == ["Point"]


class TestOtherLanguages:
    """Per-language declaration shapes."""

    def test_rust_struct_fields(self):
        content = dedent("""\
            pub struct Config {
                pub name: String,
                pub(crate) port: u16,
            }

            struct Id(u64);

            enum Color { Red, Green }
        """)
        models = detect_models(content, "rust", "src/config.rs")
        by_name = {m.name: m for m in models}
        assert set(by_name) == {"Config", "Id", "Color"}
        assert by_name["Config"].member_fields == ["name", "port"]
        assert by_name["Id"].member_fields is None
        assert by_name["Color"].member_fields is None

    def test_rust_single_line_struct_with_closure_type(self):
        content = (
            "struct Job { run: Box<dyn Fn(u32, u32) -> u32>, retries: u8 }"
        )
        (model,) = detect_models(content, "rust", "src/job.rs")
        assert model.member_fields == ["run", "retries"]

    def test_python_dataclass_and_base_model(self):
        content = dedent("""\
            @dataclass(frozen=True)
            class Point:
                x: int

            class UserIn(BaseModel):
                name: str

            class Row(pydantic.BaseModel):
                id: int

            class Plain:
                pass
        """)
        models = detect_models(content, "python", "app/schemas.py")
        assert _names(models) == ["Point", "UserIn", "Row"]
        assert all(m.member_fields is None for m in models)
        assert models[0].line == 1

    def test_go_struct(self):
        content = "type User struct {\n\tID string\n}\n"
        assert _names(detect_models(content, "go", "user.go")) == ["User"]

    def test_protobuf_message(self):
        content = 'message Ping {\n  string id = 1;\n}\n'
        assert _names(detect_models(content, "protobuf", "api.proto")) == [
            "Ping"
        ]

    def test_kotlin_data_class(self):
        content = "data class Account(val id: String)\n"
        assert _names(detect_models(content, "kotlin", "Account.kt")) == [
            "Account"
        ]

    def test_java_record(self):
        content = "public record Point(int x, int y) {}\n"
        assert _names(detect_models(content, "java", "Point.java")) == [
            "Point"
        ]

    def test_graphql_types(self):
        content = dedent("""\
            type User {
              id: ID!
              # display name
              name: String
            }

            input NewUser {
              name: String!
            }
        """)
        models = detect_models(content, "graphql", "schema.graphql")
        by_name = {m.name: m for m in models}
        assert by_name["User"].member_fields == ["id", "name"]
        assert by_name["NewUser"].member_fields == ["name"]

    @pytest.mark.parametrize("language", ["ruby", "csharp", "unknown"])
    def test_languages_without_model_patterns(self, language):
        assert detect_models("class Foo; end", language, "foo") == []


class TestExtractFields:
    """Tests for extract_fields."""

    def test_no_brace(self):
        assert extract_fields("interface Foo", 0) is None

    def test_body_without_members(self):
        assert extract_fields("interface Empty {}", 0) is None

    def test_brace_too_far_from_declaration(self):
        content = "type A = string\n\n\nfunction f() { x: 1 }"
        assert extract_fields(content, 0) is None

    def test_unterminated_body(self):
        assert extract_fields("interface Foo { id: string;", 0) is None
