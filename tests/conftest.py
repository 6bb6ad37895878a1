"""Shared resume fixtures."""

import pytest

from onepager.resume.models import (
    CustomSection,
    Education,
    Experience,
    Project,
    ResumeDocument,
)

LONG_BULLET = (
    "Designed, built and operated a distributed ingestion service handling "
    "millions of events per day, cutting end-to-end latency by a third while "
    "keeping error budgets intact across three regions."
)


@pytest.fixture
def sample_document() -> ResumeDocument:
    return ResumeDocument(
        name="Ada  Lovelace",
        title="Senior Backend Engineer",
        phone="+44 20 7946 0000",
        email="ada@example.com",
        linkedin="linkedin.com/in/ada",
        location="London, UK",
        summary="Backend engineer focused on reliable distributed systems.",
        skills="Python, SQL,  Go ,",
        experiences=[
            Experience(
                title="Staff Engineer",
                company="Analytical Engines",
                dates="2021 - Present",
                bullets=["Led the storage rewrite.", "Mentored four engineers."],
            ),
            Experience(
                title="Engineer",
                company="Difference Co",
                dates="2018 - 2021",
                bullets=["Shipped the billing pipeline."],
            ),
        ],
        projects=[
            Project(name="notes", link="github.com/ada/notes", bullets=["Annotated translations."])
        ],
        education=[
            Education(school="University of London", location="London", year="2018", degree="BSc Mathematics")
        ],
        custom_sections=[
            CustomSection(title="Languages", content="English\nFrench"),
            CustomSection(title="", content=""),
            CustomSection(title="Volunteering", content="Code club mentor"),
        ],
        awards="Award A\n\n Award B \n",
    )


@pytest.fixture
def heavy_document(sample_document) -> ResumeDocument:
    """A document far taller than one page at full scale."""
    document = sample_document.model_copy(deep=True)
    document.experiences = [
        Experience(
            title=f"Engineer {i}",
            company=f"Company {i}",
            dates=f"{2000 + i} - {2001 + i}",
            bullets=[LONG_BULLET] * 6,
        )
        for i in range(10)
    ]
    return document
