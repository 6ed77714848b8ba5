from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

# The domain layer stays free of frameworks, drivers and outer layers.
FORBIDDEN_MODULES = frozenset(
    {
        "alembic",
        "fastapi",
        "httpx",
        "opentelemetry",
        "prometheus_client",
        "psycopg",
        "pydantic",
        "sqlalchemy",
        "starlette",
        "uvicorn",
        "tableorder.api",
        "tableorder.application",
        "tableorder.infrastructure",
        "tableorder.tools",
    }
)

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
DEFAULT_DOMAIN_PATH = SRC_ROOT / "tableorder" / "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line} -> {self.module}"


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def is_forbidden(module: str, forbidden: frozenset[str] = FORBIDDEN_MODULES) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _package_of(file_path: Path) -> list[str]:
    try:
        relative = file_path.resolve().relative_to(SRC_ROOT)
    except ValueError:
        return []
    return list(relative.parent.parts)


def _imported_modules(tree: ast.AST, file_path: Path) -> Iterator[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0:
                if node.module:
                    yield node.lineno, node.module
                continue
            # Relative import: resolve against the file's package under src/.
            package = _package_of(file_path)
            if not package or node.level > len(package) + 1:
                continue
            base = package[: len(package) - (node.level - 1)]
            if node.module:
                base = [*base, *node.module.split(".")]
            yield node.lineno, ".".join(base)


def scan_file(file_path: Path, forbidden: frozenset[str] = FORBIDDEN_MODULES) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    return [
        Violation(file_path=file_path, line=line, module=module)
        for line, module in _imported_modules(tree, file_path)
        if is_forbidden(module, forbidden)
    ]


def find_violations(
    paths: Sequence[Path],
    forbidden: frozenset[str] = FORBIDDEN_MODULES,
) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(scan_file(file_path, forbidden))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dependency policy check for src/tableorder/domain imports."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/tableorder/domain.",
    )
    parser.add_argument(
        "--forbid",
        action="append",
        default=[],
        help="Additional module to forbid (repeatable).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    scan_paths = [Path(item) for item in args.path] if args.path else [DEFAULT_DOMAIN_PATH]
    forbidden = FORBIDDEN_MODULES | frozenset(args.forbid)

    violations = find_violations(scan_paths, forbidden)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(violation)
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
