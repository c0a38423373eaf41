"""Architectural tests for the To-do service.

Static file/AST checks: they read sources under the project root and never
import application code. Each test pins one structural rule of the error
and ETag plumbing so it cannot erode through local shortcuts.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path
from typing import Dict, Iterable, List, Set, Tuple

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PKG_DIR = PROJECT_ROOT / "todoapp"
SCHEMAS_DIR = PROJECT_ROOT / "schemas"

CATALOG_FILE = PKG_DIR / "config" / "error_catalog.py"
DISPATCHER_FILE = PKG_DIR / "http" / "problem.py"
ETAG_FILE = PKG_DIR / "logic" / "etag.py"
HEADER_EMITTER_FILE = PKG_DIR / "logic" / "header_emitter.py"
ROUTES_DIR = PKG_DIR / "routes"

ERROR_CODES = {
    "REQUEST-400",
    "TODO-400-FIELD",
    "ETAG-400-MISSING",
    "TODO-404",
    "ETAG-412",
    "ETAG-500-GENERATION",
    "VALIDATION-500-HANDLING",
    "SYS-500",
}
DIGEST_CALLS = {"new", "md5", "sha1", "sha224", "sha256", "sha384", "sha512", "blake2b", "blake2s"}


# --------------------
# Helper utilities
# --------------------


def _py_files(root: Path) -> List[Path]:
    return sorted(p for p in root.rglob("*.py") if "__pycache__" not in p.parts)


def _parse(path: Path) -> ast.AST:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as exc:
        pytest.fail(f"Failed to parse {path}: {exc}")


def _string_constants(tree: ast.AST) -> Iterable[Tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            yield node.lineno, node.value


def _rel(path: Path) -> str:
    return str(path.relative_to(PROJECT_ROOT))


def _enum_members(tree: ast.AST, class_name: str) -> Set[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.ClassDef) and node.name == class_name:
            return {
                t.id
                for stmt in node.body
                if isinstance(stmt, ast.Assign)
                for t in stmt.targets
                if isinstance(t, ast.Name)
            }
    pytest.fail(f"class {class_name} not found")


def _dict_assigned_to(tree: ast.AST, name: str) -> ast.Dict:
    for node in ast.walk(tree):
        target = None
        if isinstance(node, ast.Assign) and len(node.targets) == 1:
            target, value = node.targets[0], node.value
        elif isinstance(node, ast.AnnAssign):
            target, value = node.target, node.value
        if isinstance(target, ast.Name) and target.id == name and isinstance(value, ast.Dict):
            return value
    pytest.fail(f"dict literal {name} not found")


def _kind_keys(mapping: ast.Dict) -> Set[str]:
    return {k.attr for k in mapping.keys if isinstance(k, ast.Attribute)}


# --------------------
# Tests
# --------------------


def test_package_layout_exists():
    for path in (CATALOG_FILE, DISPATCHER_FILE, ETAG_FILE, HEADER_EMITTER_FILE, ROUTES_DIR):
        assert path.exists(), f"missing {_rel(path)}"


def test_error_codes_are_declared_only_in_the_catalog():
    offenders: List[str] = []
    for path in _py_files(PKG_DIR):
        if path == CATALOG_FILE:
            continue
        for lineno, value in _string_constants(_parse(path)):
            if value in ERROR_CODES:
                offenders.append(f"{_rel(path)}:{lineno} {value}")
    assert offenders == [], "error codes must only be spelled in the catalog: " + ", ".join(offenders)


def test_catalog_declares_every_code():
    declared = {v for _, v in _string_constants(_parse(CATALOG_FILE))}
    assert ERROR_CODES <= declared


def test_dispatcher_table_covers_every_error_kind():
    kinds = _enum_members(_parse(CATALOG_FILE), "ErrorKind")
    table = _kind_keys(_dict_assigned_to(_parse(DISPATCHER_FILE), "_TEMPLATE_ARGS"))
    assert kinds, "ErrorKind has no members"
    assert table == kinds, f"unhandled kinds: {sorted(kinds - table)}; unknown keys: {sorted(table - kinds)}"


def test_catalog_table_covers_every_error_kind():
    tree = _parse(CATALOG_FILE)
    kinds = _enum_members(tree, "ErrorKind")
    entries = _kind_keys(_dict_assigned_to(tree, "_ENTRIES"))
    assert entries == kinds


def test_digests_are_computed_only_by_the_etag_generator():
    offenders: List[str] = []
    for path in _py_files(PKG_DIR):
        if path == ETAG_FILE:
            continue
        for node in ast.walk(_parse(path)):
            if (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and isinstance(node.func.value, ast.Name)
                and node.func.value.id == "hashlib"
                and node.func.attr in DIGEST_CALLS
            ):
                offenders.append(f"{_rel(path)}:{node.lineno}")
    assert offenders == []


def test_routes_do_not_build_problem_responses_or_raise_http_exceptions():
    offenders: List[str] = []
    for path in _py_files(ROUTES_DIR):
        tree = _parse(path)
        for lineno, value in _string_constants(tree):
            if "problem+json" in value:
                offenders.append(f"{_rel(path)}:{lineno} problem media type literal")
        for node in ast.walk(tree):
            if isinstance(node, ast.Name) and node.id == "HTTPException":
                offenders.append(f"{_rel(path)}:{node.lineno} HTTPException")
            if isinstance(node, (ast.Try,)):
                offenders.append(f"{_rel(path)}:{node.lineno} try block")
    assert offenders == []


def test_etag_header_is_set_only_by_the_emitter():
    offenders: List[str] = []
    for path in _py_files(PKG_DIR):
        if path == HEADER_EMITTER_FILE:
            continue
        for node in ast.walk(_parse(path)):
            # response.headers["ETag"] = ...
            if isinstance(node, ast.Assign):
                for target in node.targets:
                    if (
                        isinstance(target, ast.Subscript)
                        and isinstance(target.slice, ast.Constant)
                        and isinstance(target.slice.value, str)
                        and target.slice.value.lower() == "etag"
                    ):
                        offenders.append(f"{_rel(path)}:{node.lineno}")
    assert offenders == []


def test_conditional_write_routes_depend_on_the_if_match_guard():
    tree = _parse(ROUTES_DIR / "todo_commands.py")
    guarded: Dict[str, bool] = {}
    for node in ast.walk(tree):
        if not isinstance(node, ast.FunctionDef):
            continue
        verbs = {
            d.func.attr
            for d in node.decorator_list
            if isinstance(d, ast.Call) and isinstance(d.func, ast.Attribute)
        }
        if verbs & {"put", "delete"}:
            src = ast.unparse(node.args)
            guarded[node.name] = "require_if_match" in src
    assert guarded == {"update_todo": True, "delete_todo": True}


def test_no_bare_except_in_package():
    offenders = [
        f"{_rel(path)}:{node.lineno}"
        for path in _py_files(PKG_DIR)
        for node in ast.walk(_parse(path))
        if isinstance(node, ast.ExceptHandler) and node.type is None
    ]
    assert offenders == []


def test_problem_schema_enumerates_catalog_codes():
    schema = json.loads((SCHEMAS_DIR / "problem_details.schema.json").read_text(encoding="utf-8"))
    assert set(schema["properties"]["errorCode"]["enum"]) == ERROR_CODES
    assert set(schema["required"]) == {"type", "title", "status", "detail", "instance", "errorCode"}
