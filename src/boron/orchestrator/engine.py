"""Stack orchestration: multi-step git / gh workflows over a branch stack.

Each operation re-derives what it needs (current branch, stack membership,
existing PRs) from git-branchless and gh on every call; nothing is cached
between invocations. Commands run one at a time, in order.

Partial-failure policies differ on purpose:
- create_stack and merge_stack stop at the first failing branch.
- submit_stack records the failure and carries on with the next branch.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from boron.errors import BoronError, ExternalCommandError, NoFilesFoundError
from boron.guards.paths import existing_files, validate_paths
from boron.guards.repository import ensure_ready
from boron.models import (
    CommitSpec,
    CreateStackArgs,
    ExecutionReport,
    MergeStackArgs,
    ModifyCommitArgs,
    NavigateStackArgs,
    Settings,
    SubmitStackArgs,
)
from boron.orchestrator.fallback import run_with_fallback
from boron.orchestrator.pr_body import build_pr_body
from boron.runner.base import CommandRunnerPort

logger = logging.getLogger(__name__)

_STACK_QUERY = ["branchless", "query", "stack()", "--branches"]
_SMARTLOG = ["sl"]
_CREATE_LOG_FALLBACK = ["log", "--oneline", "--graph", "-10"]
_VIEW_LOG_FALLBACK = ["log", "--oneline", "--graph", "--all", "-20"]


class StackOrchestrator:
    """Runs the nine stack operations against one working directory."""

    def __init__(
        self,
        cwd: Path,
        git: CommandRunnerPort,
        gh: CommandRunnerPort,
        settings: Settings | None = None,
    ) -> None:
        self.cwd = cwd
        self.git = git
        self.gh = gh
        self.settings = settings or Settings()

    # ─── Shared steps ────────────────────────────────────────

    async def stack_branches(self) -> list[str]:
        """Current stack, bottom to top, as reported by git-branchless."""
        raw = await self.git.run(_STACK_QUERY)
        return [line.strip() for line in raw.splitlines() if line.strip()]

    async def _commit_files(
        self,
        commit: CommitSpec,
        report: ExecutionReport,
        linear_issue: str | None,
    ) -> None:
        await self.git.run(["checkout", "-b", commit.branch_name])
        report.blank()
        report.add(f"Created branch: {commit.branch_name}")

        existing, missing = existing_files(commit.files, self.cwd)
        if not existing:
            raise NoFilesFoundError(f"No files found: {', '.join(commit.files)}")
        if missing:
            report.warning(f"Warning: files not found: {', '.join(missing)}")

        await self.git.run(["add", *existing])

        message = commit.commit_message
        if linear_issue:
            message = f"{message}\n\nRelated: {linear_issue}"
        await self.git.run(["commit", "-m", message])

        report.success(f"Committed {commit.branch_name}: {commit.commit_message}")
        report.add(f"  Files: {', '.join(existing)}")
        logger.info("Committed %d file(s) on %s", len(existing), commit.branch_name)

    async def _push_branch(self, branch: str) -> None:
        remote = self.settings.remote
        _, forced = await run_with_fallback(
            self.git,
            ["push", "-u", remote, branch],
            ["push", "--force-with-lease", "-u", remote, branch],
        )
        if forced:
            logger.info("Force-pushed %s with lease", branch)

    async def _open_pull_request_url(self, branch: str) -> str | None:
        """URL of the branch's open PR, or None. Merged and closed PRs don't count."""
        try:
            raw = await self.gh.run(["pr", "view", branch, "--json", "url,state"])
        except ExternalCommandError:
            return None
        try:
            pr = json.loads(raw) if raw else {}
        except json.JSONDecodeError:
            logger.warning("Unreadable gh pr view output for %s: %r", branch, raw)
            return None
        url = pr.get("url") if isinstance(pr, dict) else None
        if not url:
            return None
        if pr.get("state") != "OPEN":
            logger.info("Ignoring %s PR for %s: %s", str(pr.get("state")).lower(), branch, url)
            return None
        return url

    async def _ensure_pull_request(
        self,
        branch: str,
        base: str,
        stack: list[str],
        *,
        draft: bool,
        linear_issue: str | None,
    ) -> tuple[str, bool]:
        """Return (url, created). An open PR for the branch is reused."""
        url = await self._open_pull_request_url(branch)
        if url:
            logger.info("Reusing existing PR for %s: %s", branch, url)
            return url, False

        title = await self.git.run(["log", "-1", "--pretty=%s", branch])
        args = [
            "pr",
            "create",
            "--base",
            base,
            "--head",
            branch,
            "--title",
            title,
            "--body",
            build_pr_body(branch, stack, linear_issue),
        ]
        if draft:
            args.append("--draft")

        url = await self.gh.run(args)
        logger.info("Created PR for %s onto %s: %s", branch, base, url)
        return url, True

    async def _repository_pulls_url(self) -> str | None:
        try:
            repo = await self.gh.run(
                ["repo", "view", "--json", "nameWithOwner", "-q", ".nameWithOwner"]
            )
        except ExternalCommandError as exc:
            logger.debug("Could not resolve repository name: %s", exc)
            return None
        return f"https://github.com/{repo}/pulls" if repo else None

    # ─── Operations ──────────────────────────────────────────

    async def create_stack(self, args: CreateStackArgs) -> ExecutionReport:
        """Create one branch and commit per CommitSpec, chained on base_branch."""
        for commit in args.commits:
            validate_paths(commit.files, self.cwd)
        ensure_ready(self.cwd)

        base_branch = args.base_branch or self.settings.base_branch
        report = ExecutionReport()

        await self.git.run(["checkout", base_branch])
        report.add(f"Starting from {base_branch}")

        for commit in args.commits:
            try:
                await self._commit_files(commit, report, args.linear_issue)
            except BoronError as exc:
                report.failure(f"Failed on {commit.branch_name}: {exc}")
                logger.warning("create_stack stopped at %s: %s", commit.branch_name, exc)
                break

        report.blank()
        report.add("Stack created. Current state:")
        output, _ = await run_with_fallback(self.git, _SMARTLOG, _CREATE_LOG_FALLBACK)
        report.add(output)
        return report

    async def submit_stack(self, args: SubmitStackArgs) -> ExecutionReport:
        """Push every stack branch and open (or reuse) a PR chained on its predecessor."""
        report = ExecutionReport()
        branches = await self.stack_branches()
        if not branches:
            report.add("No stack branches found. Create a stack first with create_stack.")
            return report

        report.add(f"Submitting {len(branches)} branches as stacked PRs...")
        report.blank()

        previous = self.settings.base_branch
        for branch in branches:
            try:
                await self._push_branch(branch)
                url, created = await self._ensure_pull_request(
                    branch,
                    previous,
                    branches,
                    draft=args.draft,
                    linear_issue=args.linear_issue,
                )
            except BoronError as exc:
                report.failure(f"Failed on {branch}: {exc}")
                logger.warning("submit_stack failed on %s: %s", branch, exc)
                continue

            report.success(f"Submitted {branch}")
            report.add(f"  {url}" if created else f"  {url} (existing PR)")
            report.blank()
            previous = branch

        report.add("Stack submitted.")

        pulls_url = await self._repository_pulls_url()
        if pulls_url:
            report.add(f"View PRs: {pulls_url}")
        return report

    async def restack(self) -> ExecutionReport:
        """Rebase descendants of amended commits. Errors propagate."""
        output = await self.git.run(["restack"])
        report = ExecutionReport()
        report.add("Stack rebased.")
        report.blank()
        report.add(output)
        return report

    async def view_stack(self) -> ExecutionReport:
        output, fell_back = await run_with_fallback(self.git, _SMARTLOG, _VIEW_LOG_FALLBACK)
        report = ExecutionReport()
        if fell_back:
            report.add("Smartlog unavailable, falling back to git log:")
        else:
            report.add("Current stack:")
        report.blank()
        report.add(output)
        return report

    async def sync_stack(self) -> ExecutionReport:
        """Fetch, then rebase all local stacks onto the updated base. Both steps required."""
        report = ExecutionReport()
        report.add("Fetching from remote...")
        await self.git.run(["fetch", self.settings.remote])

        report.add(f"Syncing stacks with {self.settings.base_branch}...")
        report.add(await self.git.run(["sync", "--pull"]))

        report.blank()
        report.add("Stack synced.")
        return report

    async def navigate_stack(self, args: NavigateStackArgs) -> ExecutionReport:
        # git-branchless defaults to one step; pass the count only when it differs.
        command = [args.direction.value]
        if args.distance != 1:
            command.append(str(args.distance))
        await self.git.run(command)

        current = await self.git.run(["branch", "--show-current"])
        subject = await self.git.run(["log", "-1", "--pretty=%s"])

        report = ExecutionReport()
        report.add(f"Moved {args.direction.value} {args.distance} commit(s)")
        report.blank()
        report.add(f"Current: {current or 'detached HEAD'}")
        report.add(f"Commit: {subject}")
        return report

    async def modify_commit(self, args: ModifyCommitArgs) -> ExecutionReport:
        """Amend files and/or message into HEAD, then optionally restack."""
        if args.files:
            validate_paths(args.files, self.cwd)

        report = ExecutionReport()
        if args.files:
            await self.git.run(["add", *args.files])
            await self.git.run(["commit", "--amend", "--no-edit"])
            report.success(f"Amended commit with files: {', '.join(args.files)}")

        if args.message:
            await self.git.run(["commit", "--amend", "-m", args.message])
            report.success(f"Updated commit message: {args.message}")

        if args.auto_restack:
            output = await self.git.run(["restack"])
            report.blank()
            report.add("Restacked:")
            report.add(output)

        current = await self.git.run(["log", "-1", "--pretty=%h %s"])
        report.blank()
        report.add(f"Current commit: {current}")
        return report

    async def merge_stack(self, args: MergeStackArgs) -> ExecutionReport:
        """Merge PRs bottom to top, stopping at the first failure."""
        report = ExecutionReport()
        branches = await self.stack_branches()
        if not branches:
            report.add("No stack branches found to merge.")
            return report

        report.add(f"Merging {len(branches)} PRs using {args.method.value} method...")
        report.blank()

        stopped_at: str | None = None
        for branch in branches:
            try:
                output = await self.gh.run(
                    ["pr", "merge", branch, f"--{args.method.value}", "--delete-branch"]
                )
            except ExternalCommandError as exc:
                report.failure(f"Failed to merge {branch}: {exc}")
                logger.warning("merge_stack stopped at %s: %s", branch, exc)
                stopped_at = branch
                break
            report.success(f"Merged: {branch}")
            if output:
                report.add(f"  {output}")
            logger.info("Merged %s with %s", branch, args.method.value)

        if args.delete_branches:
            for branch in branches:
                try:
                    await self.git.run(["branch", "-D", branch])
                except ExternalCommandError as exc:
                    # Usually already removed by --delete-branch.
                    logger.debug("Skipping local delete of %s: %s", branch, exc)
            report.blank()
            report.add("Cleaned up local branches.")

        report.blank()
        if stopped_at is None:
            report.add("Stack merged.")
        else:
            report.add(f"Stack merge stopped at {stopped_at}; remaining PRs were left open.")
        return report

    async def undo_last(self) -> ExecutionReport:
        output = await self.git.run(["undo", "--yes"])
        report = ExecutionReport()
        report.add("Undo complete:")
        report.blank()
        report.add(output)
        return report
