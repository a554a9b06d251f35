# models/extraction_request.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


# ----------------------------------------------------------------------
#  Label policy – what to do with a <pre> block that has no label
# ----------------------------------------------------------------------
class LabelMode(str, Enum):
    STRICT = "strict"      # missing label aborts the whole page
    LENIENT = "lenient"    # missing label is logged and the block skipped


# ----------------------------------------------------------------------
#  Main request model – built by the CLI or from a YAML profile
# ----------------------------------------------------------------------
class ExtractionRequest(BaseModel):
    """
    Settings for one extraction run.

    Every field has a default so ``ExtractionRequest()`` reproduces the
    reference behaviour: TypeScript snippets from ``<pre aria-label="...">``
    blocks, formatted with Prettier's ``typescript`` parser, strict labels.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "target_extensions": ["ts", "tsx"],
                "label_mode": "lenient",
                "sitemap_url": "https://docs.example.com/sitemap.xml",
                "path_filter": "/docs/",
                "max_concurrent": 1,
            }
        }
    )

    # ------------------------------------------------------------------
    #  Snippet selection
    # ------------------------------------------------------------------
    target_extensions: List[str] = Field(
        default_factory=lambda: ["ts", "tsx"],
        description="File extensions considered in-scope for extraction",
    )
    block_tag: str = Field(
        default="pre",
        description="Tag name of the preformatted code blocks",
    )
    label_attribute: str = Field(
        default="aria-label",
        description="Attribute holding '<filename> <description...>'",
    )
    block_marker_tags: List[str] = Field(
        default_factory=lambda: ["div"],
        description="Tags that end with a newline when rendered",
    )
    label_mode: LabelMode = Field(
        default=LabelMode.STRICT,
        description="Policy for blocks that lack a label",
    )
    prefix_keys: bool = Field(
        default=False,
        description="Key snippets as '<page>:<snippet>' instead of '<snippet>'",
    )

    # ------------------------------------------------------------------
    #  Formatter
    # ------------------------------------------------------------------
    formatter_parser: str = Field(
        default="typescript",
        description="Grammar name handed to the formatter",
    )
    formatter_command: List[str] = Field(
        default_factory=lambda: ["npx", "--no-install", "prettier"],
        description="Command used to invoke Prettier",
    )

    # ------------------------------------------------------------------
    #  Crawl mode
    # ------------------------------------------------------------------
    sitemap_url: Optional[HttpUrl] = Field(
        default=None,
        description="Sitemap listing the pages to crawl",
    )
    path_filter: str = Field(
        default="",
        description="Only keep sitemap URLs whose path contains this substring",
    )
    max_concurrent: int = Field(
        default=1,
        ge=1,
        description="Pages processed at the same time (1 = sequential)",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout per request (seconds)",
    )

    # ------------------------------------------------------------------
    #  Validators
    # ------------------------------------------------------------------
    @field_validator("target_extensions")
    @classmethod
    def _normalise_extensions(cls, extensions: List[str]) -> List[str]:
        """Lower-case extensions and drop a leading dot ('.TS' -> 'ts')."""
        cleaned = [ext.strip().lstrip(".").lower() for ext in extensions]
        cleaned = [ext for ext in cleaned if ext]
        if not cleaned:
            raise ValueError("At least one target extension is required")
        return cleaned

    @field_validator("block_tag", "label_attribute")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Value must not be empty")
        return value

    @field_validator("block_marker_tags")
    @classmethod
    def _lower_tags(cls, tags: List[str]) -> List[str]:
        return [tag.strip().lower() for tag in tags if tag.strip()]

    @property
    def is_lenient(self) -> bool:
        return self.label_mode is LabelMode.LENIENT
