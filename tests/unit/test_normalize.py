"""Unit tests for the content normalizer."""

import pytest

from onepager.resume.models import CustomSection, Project, ResumeDocument
from onepager.resume.normalize import (
    ContactItem,
    bullet_list,
    contact_items,
    contact_line,
    normalize_link,
    safe_filename,
    split_lines,
    split_list,
    visible_custom_sections,
    visible_projects,
)


@pytest.mark.unit
def test_split_list_trims_and_drops_empty():
    assert split_list("Java, SQL,  Go ,") == ["Java", "SQL", "Go"]


@pytest.mark.unit
def test_split_list_keeps_duplicates_and_order():
    assert split_list("Go, Java, Go") == ["Go", "Java", "Go"]
    assert split_list("a|b||c", delimiter="|") == ["a", "b", "c"]
    assert split_list("") == []


@pytest.mark.unit
def test_split_lines_trims_and_drops_blank_lines():
    assert split_lines("Award A\n\n Award B \n") == ["Award A", "Award B"]
    assert split_lines("one\r\ntwo\rthree") == ["one", "two", "three"]
    assert split_lines("") == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    ["", "\n\n", "a\n b \n\nc", "  x  ", "first\r\n\r\nsecond\n"],
)
def test_split_lines_is_idempotent(text):
    once = split_lines(text)
    assert split_lines("\n".join(once)) == once


@pytest.mark.unit
def test_normalize_link():
    assert normalize_link("example.com/me") == "https://example.com/me"
    assert normalize_link("https://example.com/me") == "https://example.com/me"
    assert normalize_link("HTTP://example.com") == "HTTP://example.com"
    assert normalize_link("mailto:ada@example.com") == "mailto:ada@example.com"
    assert normalize_link("") == ""
    assert normalize_link("   ") == ""


@pytest.mark.unit
def test_contact_items_fixed_order_and_link_target(sample_document):
    items = contact_items(sample_document)

    assert [item.label for item in items] == [
        "+44 20 7946 0000",
        "ada@example.com",
        "linkedin.com/in/ada",
        "London, UK",
    ]
    assert items[2] == ContactItem("linkedin.com/in/ada", "https://linkedin.com/in/ada")
    assert all(item.href is None for i, item in enumerate(items) if i != 2)
    # The stored raw value is not rewritten.
    assert sample_document.linkedin == "linkedin.com/in/ada"


@pytest.mark.unit
def test_contact_items_skip_absent_channels():
    document = ResumeDocument(email="a@b.c", location="Oslo")
    assert contact_line(document) == "a@b.c · Oslo"


@pytest.mark.unit
def test_visible_custom_sections_drop_blank(sample_document):
    titles = [section.title for section in visible_custom_sections(sample_document)]
    assert titles == ["Languages", "Volunteering"]

    document = ResumeDocument(custom_sections=[CustomSection(title=" ", content="\n")])
    assert visible_custom_sections(document) == []


@pytest.mark.unit
def test_visible_projects_skip_blank_entries():
    document = ResumeDocument(
        projects=[Project(), Project(bullets=["  "]), Project(link="x.dev")]
    )
    assert [project.link for project in visible_projects(document)] == ["x.dev"]


@pytest.mark.unit
def test_bullet_list_drops_blank_bullets():
    assert bullet_list(["  one ", "", "   ", "two"]) == ["one", "two"]


@pytest.mark.unit
def test_safe_filename():
    assert safe_filename("Ada  Lovelace") == "Ada_Lovelace"
    assert safe_filename("  ") == "Resume"
    assert safe_filename("") == "Resume"
