"""Tests for reconciliation against the installed package set."""

from __future__ import annotations

from pkgdeps.core import ReconciledDependency, ResolvedDependency, pending, reconcile


def _dep(artifact_id: str | None, name: str = "pkg") -> ResolvedDependency:
    return ResolvedDependency(dependent_package=name, version_number=None, artifact_id=artifact_id)


class TestReconcile:
    """Tests for reconcile()."""

    def test_classifies_installed_and_pending(self) -> None:
        deps = [_dep("04t000000000001"), _dep("04t000000000002")]
        result = reconcile(deps, frozenset({"04t000000000002"}))
        assert result == [
            ReconciledDependency(deps[0], is_installed=False),
            ReconciledDependency(deps[1], is_installed=True),
        ]

    def test_order_preserved(self) -> None:
        deps = [_dep(f"04t00000000000{i}", name=str(i)) for i in (5, 1, 3)]
        result = reconcile(deps, frozenset())
        assert [r.dependency for r in result] == deps

    def test_dependencies_without_artifact_skipped(self) -> None:
        deps = [_dep(None), _dep("04t000000000001")]
        result = reconcile(deps, frozenset({"04t000000000001"}))
        assert len(result) == 1
        assert result[0].is_installed

    def test_empty(self) -> None:
        assert reconcile([], frozenset({"04t000000000001"})) == []

    def test_does_not_mutate_inputs(self) -> None:
        deps = [_dep("04t000000000001")]
        installed = {"04t000000000001"}
        reconcile(deps, installed)
        assert installed == {"04t000000000001"}
        assert len(deps) == 1


class TestPending:
    """Tests for pending()."""

    def test_only_not_installed(self) -> None:
        a, b = _dep("04t000000000001"), _dep("04t000000000002")
        reconciled = [ReconciledDependency(a, True), ReconciledDependency(b, False)]
        assert pending(reconciled) == [b]
