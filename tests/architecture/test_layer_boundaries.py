"""
Layer boundary contract.

1. timeverify_kernel/** may NOT import timeverify_engines,
   timeverify_config or timeverify_services.  The kernel never depends upward.

2. timeverify_engines/** may import only from timeverify_kernel.domain,
   timeverify_kernel.exceptions and timeverify_kernel.logging_config, and
   never from timeverify_config or timeverify_services.  Engines do no I/O,
   so sqlalchemy and yaml are off limits too.

3. timeverify_config/** may NOT import timeverify_services.

These tests read source code via AST -- they cannot break anything.
"""

import ast
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def _python_files(package: str) -> list[Path]:
    return sorted((REPO_ROOT / package).rglob("*.py"))


def _extract_imports(path: Path) -> list[tuple[int, str]]:
    tree = ast.parse(path.read_text(), filename=str(path))
    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                results.append((node.lineno, node.module))
    return results


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for path in _python_files(package):
        for lineno, module in _extract_imports(path):
            for prefix in forbidden:
                if module == prefix or module.startswith(f"{prefix}."):
                    found.append(f"  {path.relative_to(REPO_ROOT)}:{lineno} imports '{module}'")
    return found


def test_kernel_has_no_upward_dependencies():
    violations = _violations(
        "timeverify_kernel",
        ("timeverify_engines", "timeverify_config", "timeverify_services"),
    )
    assert not violations, "Kernel boundary violation:\n" + "\n".join(violations)


def test_engines_are_pure():
    violations = _violations(
        "timeverify_engines",
        (
            "timeverify_config",
            "timeverify_services",
            "timeverify_kernel.db",
            "timeverify_kernel.models",
            "timeverify_kernel.selectors",
            "timeverify_kernel.services",
            "sqlalchemy",
            "yaml",
        ),
    )
    assert not violations, "Engine purity violation:\n" + "\n".join(violations)


def test_engines_never_read_the_clock():
    offenders = [
        str(path.relative_to(REPO_ROOT))
        for path in _python_files("timeverify_engines")
        if "date.today(" in path.read_text() or "datetime.now(" in path.read_text()
    ]
    assert not offenders, f"Engines must take dates as parameters: {offenders}"


def test_config_does_not_import_services():
    violations = _violations("timeverify_config", ("timeverify_services",))
    assert not violations, "Config boundary violation:\n" + "\n".join(violations)
