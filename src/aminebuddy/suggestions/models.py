from pydantic import BaseModel, ConfigDict, Field


class PageSuggestion(BaseModel):
    """A link to a portfolio page attached to an assistant answer."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Display title of the page")
    href: str = Field(description="Site-relative path of the page")
    description: str | None = Field(
        default=None,
        description="Short blurb shown under the title"
    )
