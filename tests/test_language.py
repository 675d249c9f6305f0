"""Tests for extension to language classification."""

from pathlib import Path

import pytest

from sysvista.language import LANGUAGE_EXTENSIONS, detect_language


class TestDetectLanguage:
    """Tests for detect_language."""

    @pytest.mark.parametrize(
        ("path", "language"),
        [
            ("src/app.ts", "typescript"),
            ("src/App.tsx", "typescript"),
            ("index.js", "javascript"),
            ("component.jsx", "javascript"),
            ("esm.mjs", "javascript"),
            ("config.cjs", "javascript"),
            ("src/main.rs", "rust"),
            ("app/main.py", "python"),
            ("cmd/server.go", "go"),
            ("Main.java", "java"),
            ("Main.kt", "kotlin"),
            ("build.gradle.kts", "kotlin"),
            ("Program.cs", "csharp"),
            ("app.rb", "ruby"),
            ("api.proto", "protobuf"),
            ("schema.graphql", "graphql"),
            ("schema.gql", "graphql"),
        ],
    )
    def test_recognized(self, path: str, language: str) -> None:
        assert detect_language(path) == language

    @pytest.mark.parametrize(
        "path", ["README.md", "package.json", "Makefile", "style.css"]
    )
    def test_unrecognized(self, path: str) -> None:
        assert detect_language(path) is None

    def test_accepts_path_objects(self) -> None:
        assert detect_language(Path("/abs/dir/file.py")) == "python"

    def test_every_extension_has_leading_dot(self) -> None:
        assert all(ext.startswith(".") for ext in LANGUAGE_EXTENSIONS)
