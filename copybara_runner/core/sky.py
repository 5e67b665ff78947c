"""
Rendering of the ``copy.bara.sky`` configuration document.

The document defines two Copybara workflows: ``push`` mirrors the source of
truth to the destination, and ``pr`` proposes destination changes back to the
source of truth. Every function here is pure: the same input always renders
the same text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from copybara_runner.constants import SSH_URL_PREFIX
from copybara_runner.types import Transformation

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "copy.bara.sky.j2"

PR_MESSAGE_PLACEHOLDER = "${PR_MESSAGE}"
DESTINATION_REF_PLACEHOLDER = "${DESTINATION_REPO_REF}"

_env: Environment | None = None


def _get_environment() -> Environment:
    """Create the Jinja2 environment on first use."""
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
    return _env


def generate_in_excludes(globs: Iterable[str]) -> str:
    """
    Render a glob list as the inside of a Starlark list literal.

    Empty globs are dropped. ``["a", "b"]`` becomes ``"a","b"``; an empty
    list becomes an empty string.
    """
    kept = [g for g in globs if g]
    if not kept:
        return ""
    return '"' + '","'.join(kept) + '"'


def transformer(rules: Iterable[Transformation], method: str) -> str:
    """Render one ``core.{method}(...)`` clause per rule, in input order."""
    transformation = ""
    for rule in rules:
        transformation += (
            f'\n        core.{method}("{rule.source}", "{rule.target}", '
            f'paths = glob(["{rule.path}"])),'
        )
    return transformation


def generate_transformations(
    moves: Iterable[Transformation],
    replacements: Iterable[Transformation],
    side: Literal["push", "pr"],
) -> str:
    """
    Render the move and replace clauses for one side of the sync.

    Push renders move clauses before replace clauses; the pull request side
    renders replace clauses first.
    """
    move = transformer(moves, "move")
    replace = transformer(replacements, "replace")

    if side == "push":
        return move + replace
    return replace + move


def render_pr_template(template: str, message: str, destination_url: str) -> str:
    """Fill the ``${PR_MESSAGE}`` and ``${DESTINATION_REPO_REF}`` placeholders."""
    destination_ref = destination_url.replace(SSH_URL_PREFIX, "", 1).replace(
        ".git", "", 1
    )
    return template.replace(PR_MESSAGE_PLACEHOLDER, message).replace(
        DESTINATION_REF_PLACEHOLDER, destination_ref
    )


def render_sky(
    sot_repo: str,
    sot_branch: str,
    destination_repo: str,
    destination_branch: str,
    committer: str,
    local_sot: str,
    push_include: str,
    push_exclude: str,
    push_transformations: str,
    pr_include: str,
    pr_exclude: str,
    pr_transformations: str,
    pr_message: str,
    pr_template: str,
    pr_branch_name_template: str,
) -> str:
    """
    Render the complete ``copy.bara.sky`` document.

    All arguments are already-resolved strings: repository URLs, pre-joined
    glob lists (see ``generate_in_excludes``) and transformation blocks (see
    ``generate_transformations``). When ``push_transformations`` is empty the
    push workflow falls back to the reverse of the PR transformations.

    Returns:
        The document text
    """
    template = _get_environment().get_template(TEMPLATE_NAME)
    return template.render(
        sot_repo=sot_repo,
        sot_branch=sot_branch,
        destination_repo=destination_repo,
        destination_branch=destination_branch,
        committer=committer,
        local_sot=local_sot,
        push_include=push_include,
        push_exclude=push_exclude,
        push_transformations=push_transformations,
        pr_include=pr_include,
        pr_exclude=pr_exclude,
        pr_transformations=pr_transformations,
        pr_template=render_pr_template(pr_template, pr_message, destination_repo),
        pr_branch_name_template=pr_branch_name_template,
    )
