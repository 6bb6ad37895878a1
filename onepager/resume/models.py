"""Pydantic models for the editable resume document.

Every text field is an optional free-form string; the renderers derive
lists (skills, awards, custom section lines) through the normalizer rather
than storing them pre-split.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ResumeModel(BaseModel):
    """Base for resume models: unknown keys ignored, assignments validated."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value, info: ValidationInfo):
        # JSON null and empty YAML keys load as None.
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Experience(ResumeModel):
    """Work experience entry."""

    title: str = ""
    company: str = ""
    dates: str = ""
    bullets: list[str] = []


class Project(ResumeModel):
    """Personal or professional project."""

    name: str = ""
    link: str = ""
    bullets: list[str] = []


class Education(ResumeModel):
    """Education entry."""

    school: str = ""
    location: str = ""
    year: str = ""
    degree: str = ""


class CustomSection(ResumeModel):
    """User-titled section with free text content."""

    title: str = ""
    content: str = ""

    def is_blank(self) -> bool:
        return not self.title.strip() and not self.content.strip()


class ResumeDocument(ResumeModel):
    """Root resume model owned by an editing session."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    title: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    location: str = ""
    summary: str = ""
    skills: str = ""
    experiences: list[Experience] = []
    projects: list[Project] = []
    education: list[Education] = []
    custom_sections: list[CustomSection] = Field(
        default_factory=list, alias="customSections"
    )
    awards: str = ""

    @classmethod
    def default(cls) -> "ResumeDocument":
        """Session-start document: one blank entry per editable list."""
        return cls(
            experiences=[Experience()],
            projects=[Project()],
            education=[Education()],
        )


# Entry type for each list-valued section, keyed by attribute name.
SECTION_ENTRIES: dict[str, type[BaseModel]] = {
    "experiences": Experience,
    "projects": Project,
    "education": Education,
    "custom_sections": CustomSection,
}

# Sections that must keep at least one entry while being edited.
REQUIRED_SECTIONS = ("experiences", "projects", "education")

TEXT_FIELDS = (
    "name",
    "title",
    "phone",
    "email",
    "linkedin",
    "location",
    "summary",
    "skills",
    "awards",
)
