"""Import-boundary checks keeping the scanner core free of CLI and log setup."""

from __future__ import annotations

import ast
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BoundaryRule:
    """Define module prefixes that files matching a glob must not import."""

    forbidden_prefixes: frozenset[str]


DEFAULT_RULES: dict[str, BoundaryRule] = {
    "desktop_scout/core/*.py": BoundaryRule(
        forbidden_prefixes=frozenset(
            {
                "argparse",
                "desktop_scout.__main__",
                "desktop_scout.log",
            }
        )
    )
}


def _package_of(path: Path, root: Path) -> str:
    rel = path.relative_to(root).with_suffix("")
    parts = list(rel.parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    else:
        parts = parts[:-1]
    return ".".join(parts)


def collect_imports(source: str, package: str = "") -> set[str]:
    """Collect absolute module names imported by *source*.

    Relative imports are resolved against *package*.
    """
    tree = ast.parse(source)
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
            continue
        if isinstance(node, ast.ImportFrom):
            if node.level:
                base = package.split(".") if package else []
                base = base[: len(base) - (node.level - 1)] if node.level > 1 else base
                prefix = ".".join(base)
                if node.module:
                    modules.add(f"{prefix}.{node.module}" if prefix else node.module)
                else:
                    modules.update(
                        f"{prefix}.{alias.name}" if prefix else alias.name
                        for alias in node.names
                    )
            elif node.module:
                modules.add(node.module)
    return modules


def _is_forbidden(module: str, prefixes: frozenset[str]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in prefixes)


def check_file(path: Path, rule: BoundaryRule, *, package: str = "") -> list[str]:
    """Validate one file against its boundary rule."""
    if not path.exists():
        return [f"{path}: missing file for architecture guard check."]
    source = path.read_text(encoding="utf-8")
    try:
        modules = collect_imports(source, package)
    except SyntaxError as exc:
        return [f"{path}: cannot parse imports ({exc.msg})."]
    disallowed = sorted(m for m in modules if _is_forbidden(m, rule.forbidden_prefixes))
    if disallowed:
        return [f"{path}: disallowed imports: {', '.join(disallowed)}"]
    return []


def check_rules(
    root: Path, rules: Mapping[str, BoundaryRule] | None = None
) -> list[str]:
    """Run boundary rules for all files matching each rule's glob under *root*."""
    active_rules = rules or DEFAULT_RULES
    violations: list[str] = []
    for pattern, rule in active_rules.items():
        matches = sorted(root.glob(pattern))
        if not matches:
            violations.append(f"{root / pattern}: no files matched architecture guard.")
            continue
        for path in matches:
            violations.extend(
                check_file(path, rule, package=_package_of(path, root))
            )
    return violations
