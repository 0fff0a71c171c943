from typing import Literal

from pydantic import BaseModel

ThemeMode = Literal["light", "dark"]


class ThemeResponse(BaseModel):
    theme: ThemeMode
    is_dark: bool
