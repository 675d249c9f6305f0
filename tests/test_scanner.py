"""End-to-end tests for scanning a project tree."""

import json
from pathlib import Path
from textwrap import dedent

import pytest

from sysvista.config import ScanOptions
from sysvista.detectors._common import build_component
from sysvista.errors import RootNotFoundError
from sysvista.scanner import dedup_components, read_source, scan
from sysvista.schema import ComponentKind, EdgeLabel, StepType

SCHEMAS = dedent("""\
    from pydantic import BaseModel


    class MessageCreate(BaseModel):
        body: str


    class Message(BaseModel):
        id: int
        body: str
""")

CRUD = dedent("""\
    from app import schemas


    def create_message(db, body: schemas.MessageCreate) -> schemas.Message:
        return schemas.Message(id=1, body=body.body)
""")

ROUTES = dedent("""\
    from fastapi import APIRouter, Body

    from app import crud, schemas

    router = APIRouter()


    @router.post("/messages", response_model=schemas.Message)
    async def create_msg_route(body: schemas.MessageCreate = Body(...)):
        return await crud.create_message(None, body)
""")


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    return write_tree(
        tmp_path / "chat-api",
        {
            "app/schemas.py": SCHEMAS,
            "app/crud/message.py": CRUD,
            "app/routes/messages.py": ROUTES,
            "README.md": "# chat api\n",
            "app/broken.py": b"\xff\xfe\x00 not utf-8",
        },
    )


def by_name(output):
    return {c.name: c for c in output.components}


class TestScan:
    """Full pipeline over a small FastAPI project."""

    def test_document_header(self, project: Path):
        output = scan(project)
        assert output.version == "1"
        assert output.project_name == "chat-api"
        assert output.root_dir == str(project.resolve())
        assert output.detected_languages == ["python"]
        assert output.scan_stats.files_scanned == 3
        assert output.scan_stats.files_skipped == 1
        assert output.scanned_at.endswith("+00:00")

    def test_components(self, project: Path):
        comps = by_name(scan(project))
        assert comps["Message"].kind == ComponentKind.MODEL
        assert comps["MessageCreate"].kind == ComponentKind.MODEL
        assert comps["create_message"].kind == ComponentKind.SERVICE
        route = comps["POST /messages"]
        assert route.kind == ComponentKind.TRANSPORT
        assert route.consumes == ["MessageCreate"]
        assert route.produces == ["Message"]

    def test_duplicate_matches_collapse(self, project: Path):
        output = scan(project)
        ids = [c.id for c in output.components]
        assert len(ids) == len(set(ids))
        routes = [c for c in output.components if c.name == "POST /messages"]
        assert len(routes) == 1

    def test_edges(self, project: Path):
        output = scan(project)
        comps = by_name(output)
        route = comps["POST /messages"]
        found = {(e.from_id, e.to_id, e.label) for e in output.edges}

        assert (
            route.id,
            comps["create_message"].id,
            EdgeLabel.CALLS,
        ) in found
        assert (route.id, comps["Message"].id, EdgeLabel.PRODUCES) in found
        assert (
            comps["MessageCreate"].id,
            route.id,
            EdgeLabel.CONSUMES,
        ) in found
        assert all(e.from_id != e.to_id for e in output.edges)
        assert len(found) == len(output.edges)

    def test_workflow(self, project: Path):
        output = scan(project)
        comps = by_name(output)
        (workflow,) = output.workflows
        assert workflow.name == "POST /messages"
        assert [(s.component_id, s.step_type) for s in workflow.steps] == [
            (comps["POST /messages"].id, StepType.ENTRY),
            (comps["create_message"].id, StepType.CALL),
            (comps["Message"].id, StepType.RESPONSE),
        ]

    def test_rescan_is_identical(self, project: Path):
        first = scan(project).graph_dict()
        second = scan(project).graph_dict()
        assert json.dumps(first) == json.dumps(second)

    def test_worker_pool_matches_sequential(self, project: Path):
        sequential = scan(project, ScanOptions(workers=1)).graph_dict()
        pooled = scan(project, ScanOptions(workers=4)).graph_dict()
        assert pooled == sequential

    def test_ids_independent_of_other_files(self, project: Path, tmp_path):
        other = write_tree(
            tmp_path / "other",
            {"app/schemas.py": SCHEMAS, "app/extra.ts": "interface X {}\n"},
        )
        ids = {c.id for c in scan(project).components}
        message = by_name(scan(other))["Message"]
        assert message.id in ids

    def test_typescript_fields(self, tmp_path: Path):
        root = write_tree(
            tmp_path / "web",
            {"src/user.ts": "interface User { id: string; name?: string; }"},
        )
        (user,) = scan(root).components
        assert user.member_fields == ["id", "name"]
        assert user.source.file == "src/user.ts"

    def test_oversized_files_skipped(self, project: Path):
        output = scan(project, ScanOptions(max_file_bytes=10))
        assert output.components == []
        assert output.scan_stats.files_scanned == 0
        assert output.scan_stats.files_skipped == 4

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(RootNotFoundError, match="cannot resolve path"):
            scan(tmp_path / "nope")

    def test_root_must_be_directory(self, tmp_path: Path):
        file = tmp_path / "file.py"
        file.write_text("x = 1\n")
        with pytest.raises(RootNotFoundError):
            scan(file)

    def test_empty_tree(self, tmp_path: Path):
        output = scan(tmp_path)
        assert output.components == []
        assert output.edges == []
        assert output.workflows == []
        assert output.detected_languages == []


class TestHelpers:
    """Tests for scanner helpers."""

    def test_dedup_components_keeps_first(self):
        first = build_component(ComponentKind.MODEL, "A", "go", "a.go", 1)
        again = build_component(ComponentKind.MODEL, "A", "go", "a.go", 9)
        other = build_component(ComponentKind.MODEL, "B", "go", "a.go", 2)
        result = dedup_components([first, again, other])
        assert result == [first, other]
        assert result[0].line == 1

    def test_read_source_rejects_binary(self, tmp_path: Path):
        path = tmp_path / "bin.py"
        path.write_bytes(b"\x80\x81")
        assert read_source(path, 1_000) is None

    def test_read_source_missing_file(self, tmp_path: Path):
        assert read_source(tmp_path / "gone.py", 1_000) is None
