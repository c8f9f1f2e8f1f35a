"""
Layering rules, checked statically from the source tree.

    ledger_services  ->  ledger_config, ledger_kernel
    ledger_config    ->  ledger_kernel
    ledger_kernel    ->  (nothing above it)

ledger_kernel/domain holds pure value logic and must not touch the ORM.
Only the caller of a TokenLedger decides when to commit.
"""

import ast
from pathlib import Path

import pytest

from ledger_kernel.invariants import (
    ALL_KERNEL_INVARIANTS,
    FORBIDDEN_KERNEL_IMPORTS,
    KernelInvariant,
)

ROOT = Path(__file__).resolve().parents[2]


def _sources(package: str) -> list[Path]:
    return sorted((ROOT / package).rglob("*.py"))


def _parse(path: Path) -> ast.Module:
    return ast.parse(path.read_text(), filename=str(path))


def _imported_modules(path: Path):
    for node in ast.walk(_parse(path)):
        if isinstance(node, ast.Import):
            yield from ((node.lineno, alias.name) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            yield node.lineno, node.module


def _offending_imports(package: str, banned: tuple[str, ...]) -> list[str]:
    found = []
    for path in _sources(package):
        for lineno, module in _imported_modules(path):
            if any(module == b or module.startswith(b + ".") for b in banned):
                found.append(f"{path.relative_to(ROOT)}:{lineno} -> {module}")
    return found


LAYER_RULES = [
    pytest.param("ledger_kernel", FORBIDDEN_KERNEL_IMPORTS, id="kernel-is-bottom-layer"),
    pytest.param("ledger_config", ("ledger_services",), id="config-below-services"),
    pytest.param(
        "ledger_kernel/domain",
        (
            "sqlalchemy",
            "psycopg2",
            "sqlite3",
            "ledger_kernel.db",
            "ledger_kernel.models",
            "ledger_kernel.services",
        ),
        id="domain-is-pure",
    ),
]


class TestLayering:

    def test_kernel_sources_present(self):
        assert len(_sources("ledger_kernel")) > 10

    @pytest.mark.parametrize("package, banned", LAYER_RULES)
    def test_no_forbidden_imports(self, package, banned):
        offending = _offending_imports(package, banned)
        assert not offending, "\n".join(offending)


class TestTransactionOwnership:

    @pytest.mark.parametrize(
        "package",
        ["ledger_kernel/services", "ledger_kernel/selectors", "ledger_services"],
    )
    def test_package_never_commits(self, package):
        commits = [
            f"{path.relative_to(ROOT)}:{node.lineno}"
            for path in _sources(package)
            for node in ast.walk(_parse(path))
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr == "commit"
        ]
        assert not commits, "\n".join(commits)


class TestKernelInvariantDeclaration:

    def test_catalogue_is_the_whole_enum(self):
        assert ALL_KERNEL_INVARIANTS == frozenset(KernelInvariant)
        assert {
            KernelInvariant.CONSERVATION,
            KernelInvariant.FEE_RATE_ORDERING,
            KernelInvariant.REFERRAL_WRITE_ONCE,
        } <= ALL_KERNEL_INVARIANTS
        assert len(ALL_KERNEL_INVARIANTS) == 6

    def test_each_member_has_a_docstring(self):
        enum_def = next(
            node
            for node in _parse(ROOT / "ledger_kernel" / "invariants.py").body
            if isinstance(node, ast.ClassDef) and node.name == "KernelInvariant"
        )
        documented = {
            stmt.targets[0].id
            for stmt, following in zip(enum_def.body, enum_def.body[1:])
            if isinstance(stmt, ast.Assign) and isinstance(following, ast.Expr)
        }
        assert documented == {member.name for member in KernelInvariant}
