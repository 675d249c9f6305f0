"""Tests for transform detection."""

from textwrap import dedent

from sysvista.detectors.transforms import detect_transforms
from sysvista.schema import ComponentKind


def _names(content, language, file="f"):
    return [c.name for c in detect_transforms(content, language, file)]


class TestTransforms:
    """Conversion functions per language."""

    def test_typescript(self):
        content = dedent("""\
            export function toUserDto(user: User) {}
            const fromRow = (row: Row) => row;
            export const convertAll = async (xs) => xs;
            function tomorrow() {}
            function total() {}
        """)
        assert _names(content, "typescript") == [
            "toUserDto",
            "fromRow",
            "convertAll",
        ]

    def test_rust_from_impl_and_functions(self):
        content = dedent("""\
            impl From<UserRow> for User {
                fn from(row: UserRow) -> Self { todo!() }
            }

            impl User {
                pub fn to_dto(&self) -> UserDto { todo!() }
            }

            pub(crate) fn convert_units(x: f64) -> f64 { x }
        """)
        assert _names(content, "rust") == [
            "From<UserRow> for User",
            "to_dto",
            "convert_units",
        ]

    def test_python(self):
        content = dedent("""\
            def to_schema(row):
                pass

            async def from_payload(data):
                pass

            def total(xs):
                pass
        """)
        transforms = detect_transforms(content, "python", "app/mappers.py")
        assert [t.name for t in transforms] == ["to_schema", "from_payload"]
        assert transforms[0].kind == ComponentKind.TRANSFORM
        assert transforms[1].line == 4

    def test_go(self):
        content = dedent("""\
            func ToDTO(u User) DTO { return DTO{} }
            func (u User) ToJSON() []byte { return nil }
            func Total() int { return 0 }
        """)
        assert _names(content, "go") == ["ToDTO", "ToJSON"]

    def test_kotlin_extension_function(self):
        content = "fun User.toDto(): UserDto = UserDto(id)\n"
        assert _names(content, "kotlin") == ["toDto"]

    def test_java_methods_not_call_sites(self):
        content = dedent("""\
            public UserDto toDto(User user) {
                return toDto(other);
            }
        """)
        assert _names(content, "java") == ["toDto"]

    def test_csharp_pascal_case(self):
        content = "    public static UserDto ToDto(User user) {}\n"
        assert _names(content, "csharp") == ["ToDto"]

    def test_unsupported_language(self):
        assert _names("def to_x; end", "ruby") == []
