"""
Collection Domain Model

Collections are editorial groupings of Shopify products. Membership is
decided from the product title, the same way the shop grid filters.
"""
from typing import List, Literal

from pydantic import BaseModel, Field


class Collection(BaseModel):
    """
    Fields:
        slug: URL slug (/collections/<slug>)
        name: Display name
        tagline: One-line pitch under the hero
        story: Story paragraphs for the collection page
        hero_image: Asset path of the hero image
        filter_query: Title filter used for membership
        accent_color: Theme accent for the page
    """

    slug: str
    name: str
    tagline: str
    story: List[str] = Field(default_factory=list)
    hero_image: str = ""
    filter_query: str
    accent_color: Literal["purple", "magenta", "gold"]
