"""Pydantic models for JSON project files.

A project file holds the cut plan settings and the parts list. All
measurements are in millimeters.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from panelcut.domain.value_objects import STOCK_THICKNESSES

# Version 1.0: Initial schema with settings and parts list
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class StockSizeConfigSchema(BaseModel):
    """Raw sheet stock dimensions.

    Attributes:
        width: Stock panel width in mm (default 2600).
        height: Stock panel height in mm (default 1830).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=2600.0, gt=0, description="Stock panel width in mm")
    height: float = Field(
        default=1830.0, gt=0, description="Stock panel height in mm"
    )


class SettingsConfigSchema(BaseModel):
    """Cut plan settings.

    Attributes:
        stock: Stock panel dimensions.
        discard_margin: Border discarded on each side of a panel in mm.
        kerf_width: Saw blade width reserved after every cut in mm.
        panel_prices: Price of one whole panel keyed by thickness.
    """

    model_config = ConfigDict(extra="forbid")

    stock: StockSizeConfigSchema = Field(
        default_factory=StockSizeConfigSchema,
        description="Stock panel dimensions",
    )
    discard_margin: float = Field(
        default=15.0, ge=0, description="Discard margin per side in mm"
    )
    kerf_width: float = Field(
        default=3.0, ge=0, le=20, description="Saw kerf width in mm"
    )
    panel_prices: dict[float, float] = Field(
        default_factory=lambda: {thickness: 0.0 for thickness in STOCK_THICKNESSES},
        description="Price per whole panel keyed by thickness in mm",
    )

    @field_validator("panel_prices")
    @classmethod
    def validate_prices_non_negative(
        cls, v: dict[float, float]
    ) -> dict[float, float]:
        """Reject negative panel prices."""
        for thickness, price in v.items():
            if price < 0:
                raise ValueError(
                    f"Price for {thickness:g}mm panels must be non-negative"
                )
        return v

    @model_validator(mode="after")
    def validate_usable_area(self) -> "SettingsConfigSchema":
        """Ensure the discard margin leaves a usable area."""
        margin = 2 * self.discard_margin
        if margin >= self.stock.width or margin >= self.stock.height:
            raise ValueError(
                f"Discard margin {self.discard_margin:g}mm leaves no usable area "
                f"on a {self.stock.width:g}x{self.stock.height:g}mm panel"
            )
        return self


class PartConfigSchema(BaseModel):
    """One line of the parts list.

    Attributes:
        module_name: Furniture module the part belongs to.
        part_name: Name of the part.
        quantity: Number of identical pieces.
        width: Piece width in mm.
        height: Piece height in mm.
        thickness: Material thickness in mm.
    """

    model_config = ConfigDict(extra="forbid")

    module_name: str = Field(default="", description="Module name")
    part_name: str = Field(..., min_length=1, description="Part name")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    width: float = Field(..., gt=0, description="Width in mm")
    height: float = Field(..., gt=0, description="Height in mm")
    thickness: float = Field(..., gt=0, description="Thickness in mm")


class ProjectConfiguration(BaseModel):
    """Root model of a project file.

    Attributes:
        schema_version: Version of the project file format.
        name: Optional project name.
        settings: Cut plan settings.
        parts: Parts list, in the order the pieces should be considered.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", description="Schema version")
    name: str | None = Field(default=None, description="Project name")
    settings: SettingsConfigSchema = Field(
        default_factory=SettingsConfigSchema,
        description="Cut plan settings",
    )
    parts: list[PartConfigSchema] = Field(
        default_factory=list, description="Parts list"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        try:
            major_version = int(v.split(".")[0])
        except ValueError:
            major_version = None
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
