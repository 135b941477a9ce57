from textwrap import dedent

from vc_changelog.changelog.renderer import insert_release, read_document, render, render_release
from vc_changelog.grouping.group_model import ChangeSection
from vc_changelog.versioning.semver import SemanticVersion


FEATURES = ChangeSection(rank=1, heading="New features", text="*** New features\n - add login (a1)\n")
FIXES = ChangeSection(rank=2, heading="Bugfixes", text="*** Bugfixes\n - *auth* : token bug (b2)\n")


def test_render_release_layout():
    text = render_release(SemanticVersion(0, 1, 0), "2024-05-01", [FEATURES, FIXES])
    assert text == dedent(
        """\
        ** [2024-05-01] v0.1.0

        *** New features
         - add login (a1)
        *** Bugfixes
         - *auth* : token bug (b2)

        """
    )


def test_render_release_keeps_given_section_order():
    text = render_release(SemanticVersion(1, 0, 0), "2024-05-01", [FIXES, FEATURES])
    assert text.index("*** Bugfixes") < text.index("*** New features")


def test_render_into_empty_document_creates_heading():
    document = render("Changelog", SemanticVersion(0, 1, 0), "2024-05-01", [FEATURES])
    assert document.startswith("* Changelog\n** [2024-05-01] v0.1.0\n\n*** New features\n")


def test_insert_directly_below_heading():
    document = "#+TITLE: Project\n\n* Changelog\n** [2024-04-01] v0.1.0\n\n*** New features\n - old (z9)\n\n"
    new = insert_release(document, "Changelog", "** [2024-05-01] v0.2.0\n\n")
    assert new == (
        "#+TITLE: Project\n\n* Changelog\n"
        "** [2024-05-01] v0.2.0\n\n"
        "** [2024-04-01] v0.1.0\n\n*** New features\n - old (z9)\n\n"
    )


def test_existing_content_is_untouched():
    document = "intro\n* Changelog\nbody\n* Other\ntail"
    release = "** [2024-05-01] v1.0.0\n\n"
    new = insert_release(document, "Changelog", release)
    assert new.replace(release, "", 1) == document


def test_heading_without_trailing_newline():
    new = insert_release("* Changelog", "Changelog", "** [2024-05-01] v0.0.1\n\n")
    assert new == "* Changelog\n** [2024-05-01] v0.0.1\n\n"


def test_missing_heading_is_appended():
    new = insert_release("#+TITLE: Project", "Changelog", "** [2024-05-01] v0.0.1\n\n")
    assert new == "#+TITLE: Project\n* Changelog\n** [2024-05-01] v0.0.1\n\n"


def test_subheadings_and_partial_matches_are_not_the_top_heading():
    document = "** Changelog\n* Changelog old\n"
    new = insert_release(document, "Changelog", "** [2024-05-01] v0.0.1\n\n")
    assert new == document + "* Changelog\n** [2024-05-01] v0.0.1\n\n"


def test_heading_text_is_matched_literally():
    document = "* Release notes (v1+)\n"
    new = insert_release(document, "Release notes (v1+)", "** x\n")
    assert new == "* Release notes (v1+)\n** x\n"


def test_two_runs_share_one_heading():
    first = render("Changelog", SemanticVersion(0, 1, 0), "2024-05-01", [FEATURES])
    second = render("Changelog", SemanticVersion(0, 1, 1), "2024-05-02", [FIXES], first)
    assert second.count("* Changelog\n") == 1
    assert second.index("v0.1.1") < second.index("v0.1.0")
    assert "** [2024-05-01] v0.1.0" in second
    assert "** [2024-05-02] v0.1.1" in second


def test_read_document(tmp_path):
    path = tmp_path / "Changelog.org"
    assert read_document(path) == ""
    path.write_text("* Changelog\n", encoding="utf-8")
    assert read_document(path) == "* Changelog\n"


def test_crlf_document_keeps_its_line_endings():
    document = "#+TITLE: Project\r\n\r\n* Changelog\r\n** [2024-04-01] v0.1.0\r\n\r\n"
    new = render("Changelog", SemanticVersion(0, 2, 0), "2024-05-01", [FEATURES], document)
    assert new == (
        "#+TITLE: Project\r\n\r\n* Changelog\r\n"
        "** [2024-05-01] v0.2.0\r\n\r\n*** New features\r\n - add login (a1)\r\n\r\n"
        "** [2024-04-01] v0.1.0\r\n\r\n"
    )
    assert "\n" not in new.replace("\r\n", "")


def test_crlf_heading_at_end_of_document():
    new = insert_release("#+TITLE: Project\r\n* Changelog", "Changelog", "** x\n")
    assert new == "#+TITLE: Project\r\n* Changelog\r\n** x\r\n"


def test_crlf_document_without_heading():
    new = insert_release("#+TITLE: Project\r\n", "Changelog", "** x\n")
    assert new == "#+TITLE: Project\r\n* Changelog\r\n** x\r\n"


def test_read_document_keeps_crlf(tmp_path):
    path = tmp_path / "Changelog.org"
    path.write_bytes(b"* Changelog\r\n")
    assert read_document(path) == "* Changelog\r\n"
