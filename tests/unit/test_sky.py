"""Unit tests for copy.bara.sky rendering."""

import re

import pytest

from copybara_runner.core.sky import (
    generate_in_excludes,
    generate_transformations,
    render_pr_template,
    render_sky,
    transformer,
)
from copybara_runner.types import Transformation


def _render(**overrides):
    """Render a document from resolved strings, overriding any argument."""
    kwargs = {
        "sot_repo": "https://github.com/a/b.git",
        "sot_branch": "main",
        "destination_repo": "https://github.com/c/d.git",
        "destination_branch": "main",
        "committer": "x",
        "local_sot": "file:///usr/src/app",
        "push_include": '"**"',
        "push_exclude": "",
        "push_transformations": "",
        "pr_include": '"**"',
        "pr_exclude": "",
        "pr_transformations": "",
        "pr_message": "msg",
        "pr_template": "${PR_MESSAGE}",
        "pr_branch_name_template": "",
    }
    kwargs.update(overrides)
    return render_sky(**kwargs)


def _clauses(block):
    """Return the (method, source) pairs of a rendered transformation block."""
    return re.findall(r'core\.(move|replace)\("([^"]*)"', block)


class TestGenerateInExcludes:
    """Tests for glob list rendering."""

    def test_quotes_and_joins_globs(self):
        assert generate_in_excludes(["src/**", "docs/*.md"]) == '"src/**","docs/*.md"'

    def test_single_glob(self):
        assert generate_in_excludes(["**"]) == '"**"'

    def test_empty_list_renders_empty_string(self):
        assert generate_in_excludes([]) == ""

    def test_empty_globs_are_dropped(self):
        assert generate_in_excludes(["", "a", ""]) == '"a"'
        assert generate_in_excludes([""]) == ""


class TestTransformer:
    """Tests for move/replace clause rendering."""

    def test_renders_one_clause(self):
        result = transformer([Transformation("a", "b", "src/**")], "move")
        assert result == '\n        core.move("a", "b", paths = glob(["src/**"])),'

    def test_defaults_render_empty_target_and_all_files(self):
        result = transformer([Transformation.parse("TODO")], "replace")
        assert result == '\n        core.replace("TODO", "", paths = glob(["**"])),'

    def test_keeps_input_order(self):
        rules = [Transformation("one"), Transformation("two"), Transformation("three")]
        result = transformer(rules, "move")
        assert [src for _, src in _clauses(result)] == ["one", "two", "three"]

    def test_no_rules_renders_nothing(self):
        assert transformer([], "move") == ""


class TestGenerateTransformations:
    """Tests for per-side ordering of move and replace clauses."""

    moves = [Transformation("m1", "n1"), Transformation("m2", "n2")]
    replacements = [Transformation("r1", "s1"), Transformation("r2", "s2")]

    def test_push_moves_precede_replaces(self):
        result = generate_transformations(self.moves, self.replacements, "push")
        assert _clauses(result) == [
            ("move", "m1"),
            ("move", "m2"),
            ("replace", "r1"),
            ("replace", "r2"),
        ]

    def test_pr_replaces_precede_moves(self):
        result = generate_transformations(self.moves, self.replacements, "pr")
        assert _clauses(result) == [
            ("replace", "r1"),
            ("replace", "r2"),
            ("move", "m1"),
            ("move", "m2"),
        ]

    def test_empty_inputs(self):
        assert generate_transformations([], [], "push") == ""
        assert generate_transformations([], [], "pr") == ""


class TestRenderPrTemplate:
    """Tests for PR template placeholder substitution."""

    def test_substitutes_message(self):
        assert render_pr_template("${PR_MESSAGE}", "Hello", "x") == "Hello"

    def test_substitutes_every_occurrence(self):
        result = render_pr_template("${PR_MESSAGE} / ${PR_MESSAGE}", "Hi", "x")
        assert result == "Hi / Hi"

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("git@github.com:c/d.git", "c/d"),
            ("https://github.com/c/d.git", "https://github.com/c/d"),
        ],
    )
    def test_substitutes_destination_ref(self, url, expected):
        result = render_pr_template("From ${DESTINATION_REPO_REF}", "", url)
        assert result == f"From {expected}"

    def test_template_without_placeholders_is_unchanged(self):
        assert render_pr_template("Static text", "Hi", "x") == "Static text"


class TestRenderSky:
    """Tests for the full document."""

    def test_is_deterministic(self):
        assert _render() == _render()

    def test_starts_with_blank_line_and_ends_with_newline(self):
        document = _render()
        assert document.startswith("\n# Variables\n")
        assert document.endswith(")\n")

    def test_variables_are_rendered(self):
        document = _render()
        assert 'SOT_REPO = "https://github.com/a/b.git"' in document
        assert 'DESTINATION_REPO = "https://github.com/c/d.git"' in document
        assert 'COMMITTER = "x"' in document
        assert 'LOCAL_SOT = "file:///usr/src/app"' in document
        assert 'PUSH_INCLUDE = ["**"]' in document
        assert "PUSH_EXCLUDE = []" in document

    def test_defines_both_workflows(self):
        document = _render()
        assert 'core.workflow(\n    name = "push",' in document
        assert 'core.workflow(\n    name = "pr",' in document

    @pytest.mark.parametrize(
        "keyword",
        [
            "core.workflow(",
            "git.origin(",
            "git.github_destination(",
            "git.github_pr_origin(",
            "git.github_pr_destination(",
            "authoring.pass_thru(default = COMMITTER)",
            'metadata.restore_author("ORIGINAL_AUTHOR", search_all_changes = True)',
            'metadata.expose_label("COPYBARA_INTEGRATE_REVIEW")',
            'metadata.save_author("ORIGINAL_AUTHOR")',
            "metadata.replace_message(PR_TEMPLATE)",
            "glob(PUSH_INCLUDE, exclude = PUSH_EXCLUDE)",
        ],
    )
    def test_external_keywords_are_verbatim(self, keyword):
        assert keyword in _render()

    def test_empty_push_transformations_fall_back_to_reversed_pr(self):
        pr_block = generate_transformations(
            [Transformation("a", "b")], [Transformation("c", "d")], "pr"
        )
        document = _render(pr_transformations=pr_block)
        assert "PUSH_TRANSFORMATIONS = [\n]" in document
        assert f"PR_TRANSFORMATIONS = [{pr_block}\n]" in document
        assert (
            "] + PUSH_TRANSFORMATIONS if PUSH_TRANSFORMATIONS "
            "else core.reverse(PR_TRANSFORMATIONS)," in document
        )

    def test_push_transformations_are_rendered_into_the_list(self):
        push_block = generate_transformations([Transformation("a", "b")], [], "push")
        document = _render(push_transformations=push_block)
        assert (
            'PUSH_TRANSFORMATIONS = [\n        core.move("a", "b", '
            'paths = glob(["**"])),\n]' in document
        )

    def test_pr_branch_omitted_without_branch_name_template(self):
        document = _render()
        assert "integrates = [],\n    )," in document
        assert "pr_branch =" not in document

    def test_pr_branch_included_with_branch_name_template(self):
        document = _render(pr_branch_name_template="sync/${CONTEXT_REFERENCE}")
        assert (
            "integrates = [],\n        pr_branch = PR_BRANCH_NAME_TEMPLATE,\n    ),"
            in document
        )
        assert 'PR_BRANCH_NAME_TEMPLATE = "sync/${CONTEXT_REFERENCE}"' in document

    def test_pr_template_is_resolved(self):
        document = _render(
            destination_repo="git@github.com:c/d.git",
            pr_message="Sync",
            pr_template="${PR_MESSAGE} (${DESTINATION_REPO_REF})",
        )
        assert 'PR_TEMPLATE = """Sync (c/d)"""' in document
