"""
Menu document schema - the JSON structure behind the storefront and the editor.

    MenuDocument { tabs: Tab[] }
    Tab          { id, label, title?, groups: Group[] }
    Group        { label, items: Item[], open? }
    Item         { name, desc, price }

Unknown keys are kept so that a document round-trips through the editor without
losing data. The group `open` flag is editor state only and is never serialised.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_serializer


class _MenuModel(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,  # prices are sometimes typed as numbers
        validate_assignment=True,
    )


class Item(_MenuModel):
    """A single menu entry"""

    name: str = Field(default="", description="Dish or drink name")
    desc: str = Field(default="", description="Short description")
    price: str = Field(default="", description="Display price, kept as text (e.g. '2.50')")


class Group(_MenuModel):
    """Named subsection of items within a tab"""

    label: str = Field(default="", description="Section title")
    items: List[Item] = Field(default_factory=list)
    open: Optional[bool] = Field(
        default=None,
        exclude=True,
        validation_alias=AliasChoices("open", "_open"),
        description="Collapsed/expanded state in the admin editor (not persisted)",
    )

    @property
    def is_open(self) -> bool:
        return self.open is not False


class Tab(_MenuModel):
    """Top-level menu category"""

    id: str = Field(default="", description="Anchor id of the tab panel")
    label: str = Field(default="", description="Text of the tab button")
    title: Optional[str] = Field(default=None, description="Heading shown above the tab's groups")
    groups: List[Group] = Field(default_factory=list)

    @model_serializer(mode="wrap")
    def _omit_missing_title(self, handler):
        data = handler(self)
        # an explicit null title is kept, an absent one stays absent
        if self.title is None and "title" not in self.model_fields_set:
            data.pop("title", None)
        return data

    def display_label(self, fallback: str = "") -> str:
        return self.label or self.id or fallback


class MenuDocument(_MenuModel):
    """The whole menu: an ordered list of tabs"""

    tabs: List[Tab] = Field(default_factory=list)

    def clone(self) -> "MenuDocument":
        return self.model_copy(deep=True)
