from __future__ import annotations

import sys

from pydantic import BaseModel, Field, PositiveInt


def default_opener() -> list[str]:
    if sys.platform == "darwin":
        return ["open"]
    return ["xdg-open"]


class SearchModel(BaseModel):
    max_depth: int = Field(default=3, ge=0, le=32)
    file_cap: PositiveInt = 100
    app_cap: PositiveInt = 50
    workers: int = Field(default=4, ge=1, le=64)
    chunk_size: PositiveInt = 256
    extra_roots: list[str] = Field(default_factory=list)


class IconsModel(BaseModel):
    sizes: list[str] = Field(
        default_factory=lambda: ["128x128", "256x256", "scalable", "64x64", "48x48", "32x32"]
    )
    extensions: list[str] = Field(default_factory=lambda: ["png", "svg", "xpm"])
    # false: executable results carry the icon file path instead of a data: URI
    inline_icons: bool = True


class LaunchModel(BaseModel):
    opener: list[str] = Field(default_factory=default_opener, min_length=1)


class ConfigModel(BaseModel):
    search: SearchModel = Field(default_factory=SearchModel)
    icons: IconsModel = Field(default_factory=IconsModel)
    launch: LaunchModel = Field(default_factory=LaunchModel)
