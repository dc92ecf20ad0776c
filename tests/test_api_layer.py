"""Tests for API layer guardrails."""

import ast
from pathlib import Path

import tasklists.api

API_DIR = Path(tasklists.api.__file__).parent


def _imports(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node, alias.name, None
        elif isinstance(node, ast.ImportFrom):
            for alias in node.names:
                yield node, node.module or "", alias.name


def _type_checking_nodes(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    guarded = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.If) and isinstance(node.test, ast.Name) and node.test.id == "TYPE_CHECKING":
            for child in ast.walk(node):
                guarded.add(id(child))
    return guarded, tree


def test_api_layer_has_no_sqlalchemy_imports():
    """API modules may import Session for type hints only."""
    violations = []
    for api_file in sorted(API_DIR.glob("*.py")):
        for node, module, name in _imports(api_file):
            if module.startswith("sqlalchemy"):
                if module == "sqlalchemy.orm" and name == "Session":
                    continue
                violations.append(f"{api_file.name}:{node.lineno} imports {module}.{name}")
    assert not violations, "API layer has SQLAlchemy imports:\n" + "\n".join(violations)


def test_api_layer_imports_schema_only_for_type_checking():
    violations = []
    for api_file in sorted(API_DIR.glob("*.py")):
        guarded, tree = _type_checking_nodes(api_file)
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and (node.module or "").endswith("database.schema"):
                if id(node) not in guarded:
                    violations.append(f"{api_file.name}:{node.lineno}")
    assert not violations, "schema imported outside TYPE_CHECKING:\n" + "\n".join(violations)


def test_api_layer_does_not_touch_session_directly():
    """Session calls belong in repositories."""
    forbidden = {"query", "add", "commit", "delete", "execute", "get"}
    violations = []
    for api_file in sorted(API_DIR.glob("*.py")):
        tree = ast.parse(api_file.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr in forbidden
                and isinstance(node.func.value, (ast.Name, ast.Attribute))
                and (getattr(node.func.value, "id", None) == "session" or getattr(node.func.value, "attr", None) == "session")
            ):
                violations.append(f"{api_file.name}:{node.lineno} session.{node.func.attr}()")
    assert not violations, "\n".join(violations)
