"""Mutation testing analysis.

Wraps ``mutmut`` results for ``bigint.py`` and ``digits.py`` and maps
each surviving mutant back to the branch ID it lives under, so a gap
reads as "BRANCH-ID needs a test that notices this change".

Workflow::

    pip install -e '.[test,mutation]'
    mutmut run          # settings live in pyproject.toml [tool.mutmut]
    python validation/mutation_analysis.py

The goal: every mutant should be *killed* by at least one test.
"""
from __future__ import annotations

import re
import subprocess
import sys
from dataclasses import dataclass, field

# "    bigint.x_add__mutmut_3: survived"
_RESULT_LINE = re.compile(r"^\s*(?P<name>[\w.]+__mutmut_\d+):\s*(?P<status>[\w ]+)$")
# Trailing "# ADD-SAME-SIGN" style comments in the source.
_BRANCH_COMMENT = re.compile(r"#\s*([A-Z]+(?:-[A-Z0-9]+)+)\s*$")

STATUSES = ("killed", "survived", "timeout", "suspicious", "no tests", "skipped")


@dataclass
class Mutant:
    name: str
    status: str
    source_file: str
    branch: str | None = None
    diff: str = ""


@dataclass
class MutationReport:
    counts: dict[str, int] = field(default_factory=dict)
    survivors: list[Mutant] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def killed(self) -> int:
        return self.counts.get("killed", 0)

    @property
    def survived(self) -> int:
        return self.counts.get("survived", 0)

    @property
    def score(self) -> float:
        if self.total == 0:
            return 0.0
        return self.killed / self.total

    def by_branch(self) -> dict[str, list[Mutant]]:
        grouped: dict[str, list[Mutant]] = {}
        for m in self.survivors:
            grouped.setdefault(m.branch or "(no branch ID)", []).append(m)
        return grouped

    def summary(self) -> str:
        lines = ["Mutation Testing Report", "=" * 40]
        for status in STATUSES:
            if status in self.counts:
                lines.append(f"{status.capitalize() + ':':<17}{self.counts[status]}")
        lines.append(f"Total mutants:   {self.total}")
        lines.append(f"Mutation score:  {self.score:.1%}")
        if self.survivors:
            lines.append("")
            lines.append("Surviving mutants by branch:")
            for branch, mutants in sorted(self.by_branch().items()):
                lines.append(f"  {branch}")
                for m in mutants:
                    lines.append(f"    [{m.name}] {m.source_file}")
            lines.append("")
            lines.append("Add a test under each branch above that detects the change.")
        else:
            lines.append("\nAll mutants killed.")
        return "\n".join(lines)


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, cwd=".")


def source_file_of(name: str) -> str:
    """``bigint.x_add__mutmut_3`` -> ``bigint.py``."""
    return name.split(".", 1)[0] + ".py"


def branch_of(diff: str) -> str | None:
    """Name the branch a mutant diff touches.

    Prefers a branch comment on a removed line, then the nearest one
    above the first removed line within the shown function.
    """
    nearest = None
    for line in diff.splitlines():
        if line.startswith(("---", "+++", "@@")):
            continue
        match = _BRANCH_COMMENT.search(line)
        if line.startswith("-"):
            return match.group(1) if match else nearest
        if match and not line.startswith("+"):
            nearest = match.group(1)
    return nearest


def parse_results(output: str) -> dict[str, str]:
    """Map mutant name to status from ``mutmut results --all true``."""
    results = {}
    for line in output.splitlines():
        match = _RESULT_LINE.match(line)
        if match:
            results[match.group("name")] = match.group("status").strip()
    return results


def parse_mutmut_results() -> MutationReport:
    """Collect ``mutmut`` results into a structured report."""
    try:
        result = _run(["mutmut", "results", "--all", "true"])
    except FileNotFoundError:
        print("mutmut not installed.  Install with: pip install -e '.[mutation]'")
        sys.exit(1)

    report = MutationReport()
    for name, status in parse_results(result.stdout).items():
        report.counts[status] = report.counts.get(status, 0) + 1
        if status != "survived":
            continue
        diff = _run(["mutmut", "show", name]).stdout
        report.survivors.append(Mutant(
            name=name,
            status=status,
            source_file=source_file_of(name),
            branch=branch_of(diff),
            diff=diff.strip(),
        ))
    return report


def main() -> None:
    print("Analyzing mutation testing results ...\n")
    report = parse_mutmut_results()
    print(report.summary())

    if report.total == 0:
        print("\nNo mutmut results found.  Run mutmut first:")
        print("  mutmut run")
        sys.exit(1)

    if report.score < 1.0:
        print(f"\nTarget:  100% mutation score")
        print(f"Current: {report.score:.1%}")
        print(f"Action:  Add tests for the {report.survived} surviving mutant(s)")
        sys.exit(1)
    else:
        print("\nMutation score target met!")


if __name__ == "__main__":
    main()
